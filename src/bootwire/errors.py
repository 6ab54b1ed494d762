"""Exceptions raised while resolving an object graph."""

from typing import Any

__all__ = [
    "DependencyError",
    "TypeNotFoundError",
    "NoImplementationBoundError",
    "MissingConfigurationError",
    "UnresolvableParameterError",
    "InvalidKeyError",
    "ConfigurationFileError",
]


class DependencyError(Exception):
    """Raised when a class or one of its dependencies cannot be resolved."""

    pass


class TypeNotFoundError(DependencyError, LookupError):
    """Raised when a type key cannot be resolved to a class."""

    def __init__(self, key: Any):
        super().__init__(f'Class "{key}" not found.')
        self.key = key


class NoImplementationBoundError(DependencyError):
    """Raised when an abstract class is requested and nothing is bound to it."""

    def __init__(self, abstract: type):
        super().__init__(
            f"No implementation found for interface or abstract class "
            f"'{abstract.__qualname__}'."
        )
        self.abstract = abstract


class MissingConfigurationError(DependencyError):
    def __init__(self, cls: type, parameter: str):
        super().__init__(
            f'Class "{cls.__qualname__}" is missing configuration '
            f'for parameter "{parameter}".'
        )
        self.cls = cls
        self.parameter = parameter


class UnresolvableParameterError(DependencyError):
    """Raised when a parameter's annotation exists but cannot be evaluated."""

    def __init__(self, cls: type, parameter: str, reason: str = ""):
        message = f'Parameter "{parameter}" of class "{cls.__qualname__}" cannot be resolved'
        super().__init__(f"{message}: {reason}" if reason else message)
        self.cls = cls
        self.parameter = parameter


class InvalidKeyError(DependencyError, ValueError):
    pass


class ConfigurationFileError(DependencyError):
    """Raised when a configuration file does not have the expected shape."""

    pass
