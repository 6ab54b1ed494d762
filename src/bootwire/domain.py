"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Any, Optional, Union


TypeKey = Union[str, type]
"""Key used to request a type from a resolver.

Either the class itself or a string naming it: a name registered with
``Resolver.register_type`` or an importable dotted path such as
``"myapp.storage.SqlStorage"`` or ``"myapp.storage:SqlStorage"``.
"""


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()
"""Marks a parameter that declares no default value."""


@dataclass(frozen=True)
class Parameter:
    """Describes one constructor parameter of a type being resolved.

    Attributes:
        name: The parameter name in the constructor signature.
        declared_type: The annotated type with any ``Optional[...]`` stripped, or None
            when the parameter is not annotated or its annotation is not a plain class.
        is_object: True when the declared type must be built by the resolver rather than
            looked up in configuration.
        optional: True when the parameter can be omitted (it has a default or is variadic).
        variadic: True for a ``*args`` style parameter.
        keyword_only: True for parameters that can only be passed by keyword.
        default: The declared default, or ``NO_DEFAULT``.
        unresolvable: Why the annotation could not be evaluated, if it could not.
    """

    name: str
    declared_type: Optional[type]
    is_object: bool
    optional: bool
    variadic: bool = False
    keyword_only: bool = False
    default: Any = NO_DEFAULT
    unresolvable: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT
