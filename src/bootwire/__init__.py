"""Bootwire object-graph resolution.

Bootwire builds objects by building their constructor arguments first. Parameters
annotated with a class are resolved to other managed instances; scalar
parameters are filled from configuration registered per class, with subclasses
inheriting and overriding the configuration of their ancestors. Abstract classes
are rebound to concrete implementations, and every class is built at most once.

Basic Usage:
    >>> from bootwire import Resolver
    >>>
    >>> resolver = Resolver()
    >>> resolver.bind(Storage, SqlStorage)
    >>> resolver.configure(SqlStorage, {"url": "sqlite://"})
    >>>
    >>> service = resolver.instantiate(UserService)

The framework consists of several core modules:
    - resolver: Bindings, configuration and the instantiate entry point
    - config_store: Ordered key-value configuration storage
    - introspection: Describing classes and their constructor parameters
    - construction: Building instances, optionally through factories
    - instance_cache: One instance per concrete class
    - builders: Resolver construction from mappings and YAML files
    - errors: Framework-specific exceptions
"""

from bootwire.builders import load_configuration, make_resolver
from bootwire.config_store import ConfigStore
from bootwire.errors import (
    ConfigurationFileError,
    DependencyError,
    InvalidKeyError,
    MissingConfigurationError,
    NoImplementationBoundError,
    TypeNotFoundError,
    UnresolvableParameterError,
)
from bootwire.resolver import Resolver

__all__ = [
    "ConfigStore",
    "Resolver",
    "make_resolver",
    "load_configuration",
    "DependencyError",
    "TypeNotFoundError",
    "NoImplementationBoundError",
    "MissingConfigurationError",
    "UnresolvableParameterError",
    "InvalidKeyError",
    "ConfigurationFileError",
]
