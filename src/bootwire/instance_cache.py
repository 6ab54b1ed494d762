"""Store of constructed instances, one per concrete type.

An instance built for an abstract request is stored under both the abstract
class and the concrete class, so later requests for either return the very
same object.
"""

from typing import Any, Iterator, Optional

__all__ = ["InstanceCache"]


class InstanceCache:
    """Mapping from classes to the single instance built for them.

    Attributes:
        instances: Dictionary mapping classes to instances.

    Example:
        >>> cache = InstanceCache()
        >>> cache.store(SqlStorage, storage, alias=Storage)
        >>> cache[Storage] is cache[SqlStorage]
        True
    """

    def __init__(self):
        self.instances: dict[type, Any] = {}

    def store(self, cls: type, instance: Any, alias: Optional[type] = None) -> Any:
        """Cache ``instance`` under ``cls`` and, if given, under ``alias``.

        Returns:
            The instance, so construction and caching read as one expression.
        """
        self.instances[cls] = instance
        if alias is not None:
            self.instances[alias] = instance
        return instance

    def __getitem__(self, cls: type) -> Any:
        return self.instances[cls]

    def __contains__(self, cls: object) -> bool:
        return cls in self.instances

    def __iter__(self) -> Iterator[type]:
        return iter(self.instances)

    def __len__(self) -> int:
        return len(self.instances)
