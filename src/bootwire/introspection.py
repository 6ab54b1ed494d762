"""Type introspection used by the resolver.

The resolver never inspects classes directly. It asks a
:class:`TypeIntrospector` to turn type keys into classes, to tell abstract
classes from concrete ones, to describe constructor parameters and to list a
class's ancestors. :class:`ReflectionIntrospector` implements this contract
with :mod:`inspect` and standard type hints.
"""

import enum
import importlib
import inspect
import sys
import types
from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional, Union, get_args, get_origin, get_type_hints

from bootwire.domain import NO_DEFAULT, Parameter
from bootwire.errors import TypeNotFoundError

__all__ = ["TypeIntrospector", "ReflectionIntrospector", "SCALAR_TYPES"]


SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
    type,
    enum.Enum,
)
"""Types (and their subclasses) that are always filled from configuration."""

_UNION_TYPES = tuple(
    t for t in (Union, getattr(types, "UnionType", None)) if t is not None
)

_ANNOTATION_ERRORS = (NameError, AttributeError, TypeError, SyntaxError)


class TypeIntrospector(ABC):
    """Contract between the resolver and whatever describes types to it."""

    @abstractmethod
    def lookup(self, key: Any) -> type:
        """Return the class named by ``key``.

        Raises:
            TypeNotFoundError: If ``key`` does not name a class.
        """

    @abstractmethod
    def is_abstract(self, cls: type) -> bool:
        """Whether ``cls`` cannot be constructed and needs a bound implementation."""

    @abstractmethod
    def parameters(self, cls: type) -> list[Parameter]:
        """Describe the constructor parameters of ``cls`` in declaration order."""

    @abstractmethod
    def ancestors(self, cls: type) -> list[type]:
        """List the ancestors of ``cls``, most distant first, excluding ``cls`` itself."""


class ReflectionIntrospector(TypeIntrospector):
    """Introspect live classes using :mod:`inspect` and type hints.

    String keys are treated as import paths, either ``"package.module.Class"``
    or ``"package.module:Class"``; nested classes may be named with further dots.
    """

    def lookup(self, key: Any) -> type:
        if inspect.isclass(key):
            return key
        if not isinstance(key, str) or not key:
            raise TypeNotFoundError(key)

        cls = _import_class(key)
        if cls is None:
            raise TypeNotFoundError(key)
        return cls

    def is_abstract(self, cls: type) -> bool:
        return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))

    def parameters(self, cls: type) -> list[Parameter]:
        init = cls.__init__
        if init is object.__init__:
            return []

        signature = inspect.signature(init)
        hints, failures = _type_hints(cls, init)

        result = []
        for index, (name, param) in enumerate(signature.parameters.items()):
            if index == 0 or param.kind is inspect.Parameter.VAR_KEYWORD:
                continue
            result.append(_make_parameter(param, hints.get(name), failures.get(name)))
        return result

    def ancestors(self, cls: type) -> list[type]:
        return [ancestor for ancestor in reversed(cls.__mro__[1:]) if ancestor is not object]


def _import_class(path: str) -> Optional[type]:
    if ":" in path:
        module_name, _, qualname = path.partition(":")
        candidates = [(module_name, qualname.split("."))]
    else:
        parts = path.split(".")
        candidates = [
            (".".join(parts[:i]), parts[i:]) for i in range(len(parts) - 1, 0, -1)
        ]

    for module_name, attributes in candidates:
        if not module_name or module_name.startswith("."):
            continue
        try:
            target: Any = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name and (
                exc.name == module_name or module_name.startswith(exc.name + ".")
            ):
                continue
            raise
        except ValueError:
            continue

        for attribute in attributes:
            target = getattr(target, attribute, None)
            if target is None:
                break
        if inspect.isclass(target):
            return target
    return None


def _type_hints(cls: type, init: Any) -> tuple[dict[str, Any], dict[str, str]]:
    """Evaluate the annotations of ``init``, one parameter at a time if need be.

    Returns:
        The evaluated hints, and a description of every annotation that could not
        be evaluated keyed by parameter name.
    """
    try:
        return get_type_hints(init, include_extras=True), {}
    except _ANNOTATION_ERRORS:
        pass

    module = sys.modules.get(cls.__module__)
    globalns = getattr(init, "__globals__", None) or getattr(module, "__dict__", {})
    localns = dict(vars(cls))
    localns.setdefault(cls.__name__, cls)

    hints: dict[str, Any] = {}
    failures: dict[str, str] = {}
    for name, annotation in getattr(init, "__annotations__", {}).items():
        shim = types.SimpleNamespace(__annotations__={name: annotation})
        try:
            hints.update(get_type_hints(shim, globalns, localns, include_extras=True))
        except _ANNOTATION_ERRORS as exc:
            failures[name] = f"annotation {annotation!r} cannot be evaluated ({exc})"
    return hints, failures


def _make_parameter(
    param: inspect.Parameter, annotation: Any, failure: Optional[str]
) -> Parameter:
    variadic = param.kind is inspect.Parameter.VAR_POSITIONAL
    default = NO_DEFAULT if param.default is inspect.Parameter.empty else param.default
    declared_type, is_object = _classify(annotation)

    return Parameter(
        name=param.name,
        declared_type=declared_type,
        is_object=is_object,
        optional=variadic or default is not NO_DEFAULT,
        variadic=variadic,
        keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
        default=default,
        unresolvable=failure,
    )


def _classify(annotation: Any) -> tuple[Optional[type], bool]:
    """Split an annotation into its declared class and whether the resolver builds it.

    Example:
        >>> _classify(Optional[Database])   # (Database, True)
        >>> _classify(int)                  # (int, False)
        >>> _classify(list[str])            # (list, False)
        >>> _classify(Union[int, str])      # (None, False)
    """
    if annotation is None:
        return None, False

    base = _strip_optional(annotation)
    origin = get_origin(base)
    if origin is not None:
        return (origin if inspect.isclass(origin) else None), False
    if base is Any or not inspect.isclass(base):
        return None, False

    return base, not (base in (object, type(None)) or issubclass(base, SCALAR_TYPES))


def _strip_optional(annotation: Any) -> Any:
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
        elif origin in _UNION_TYPES:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                return annotation
            annotation = members[0]
        else:
            return annotation
