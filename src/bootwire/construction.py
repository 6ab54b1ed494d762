"""Construction of resolved types.

The :class:`Constructor` is the last step of resolution: it receives a class
and the arguments the resolver worked out for it, and produces the instance.
Factories can be registered per class to take over construction, for classes
that need more than a plain constructor call.
"""

import logging
from typing import Any, Callable, Optional

__all__ = ["Constructor", "Factory"]

logger = logging.getLogger(__name__)

Factory = Callable[..., Any]


class Constructor:
    """Build instances from a class and its resolved arguments."""

    def __init__(self, factories: Optional[dict[type, Factory]] = None):
        self._factories: dict[type, Factory] = dict(factories or {})

    def register(self, cls: type, factory: Factory):
        """Use ``factory`` instead of ``cls`` itself to construct ``cls``.

        Args:
            cls: The class the factory produces.
            factory: A callable accepting the same arguments as the constructor of ``cls``.
        """
        self._factories[cls] = factory

    def has_factory(self, cls: type) -> bool:
        return cls in self._factories

    def construct(
        self, cls: type, args: list[Any], kwargs: Optional[dict[str, Any]] = None
    ) -> Any:
        """Invoke the factory registered for ``cls``, or ``cls`` itself.

        Args:
            cls: The concrete class to construct.
            args: Positional arguments, in constructor declaration order.
            kwargs: Keyword-only arguments.

        Returns:
            The new instance.
        """
        factory = self._factories.get(cls, cls)
        logger.debug(
            "Constructing %s with %d positional and %d keyword arguments",
            cls.__qualname__,
            len(args),
            len(kwargs or {}),
        )
        return factory(*args, **(kwargs or {}))
