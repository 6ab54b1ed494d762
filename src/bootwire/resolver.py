"""
Module for resolving classes into fully constructed object graphs.

A :class:`Resolver` builds an instance of a requested class by building its
constructor arguments first. Parameters annotated with a class are built
recursively; every other parameter is filled from configuration registered
for the class or one of its ancestors, falling back to its declared default.

Abstract classes are replaced by the implementation bound to them, and every
instance is cached so that each concrete class is built at most once:

    >>> resolver = Resolver()
    >>> resolver.bind(Storage, SqlStorage)
    >>> resolver.configure(SqlStorage, {"url": "sqlite://"})
    >>> resolver.instantiate(Storage) is resolver.instantiate(SqlStorage)
    True
"""

import inspect
import logging
import threading
from typing import Any, Callable, Mapping, Optional, Union

from bootwire.config_store import ConfigStore
from bootwire.construction import Constructor, Factory
from bootwire.domain import Parameter, TypeKey
from bootwire.errors import (
    MissingConfigurationError,
    NoImplementationBoundError,
    TypeNotFoundError,
    UnresolvableParameterError,
)
from bootwire.instance_cache import InstanceCache
from bootwire.introspection import ReflectionIntrospector, TypeIntrospector

__all__ = ["Resolver"]

logger = logging.getLogger(__name__)


class Resolver:
    """
    Builds and caches instances of classes, resolving their constructor arguments.

    A resolver holds three registries: bindings from abstract classes to their
    implementations, configuration stores per class, and the instances built so
    far. Bindings and configuration are expected to be registered during
    application bootstrap, before the first :meth:`instantiate` call that depends
    on them; instances already cached are never rebuilt.

    Resolution is guarded by a re-entrant lock, so concurrent requests for the
    same class observe a single instance.
    """

    def __init__(
        self,
        introspector: Optional[TypeIntrospector] = None,
        constructor: Optional[Constructor] = None,
    ):
        self._introspector = introspector or ReflectionIntrospector()
        self._constructor = constructor or Constructor()
        self._names: dict[str, type] = {}
        self._bindings: dict[type, TypeKey] = {}
        self._configuration: dict[type, ConfigStore] = {}
        self._cache = InstanceCache()
        self._lock = threading.RLock()

    def lookup(self, key: TypeKey) -> type:
        """Return the class named by ``key``.

        Registered names take precedence over import paths.

        Raises:
            TypeNotFoundError: If ``key`` does not name a class.
        """
        if isinstance(key, str) and key in self._names:
            return self._names[key]
        return self._introspector.lookup(key)

    def register_type(
        self, cls: Optional[type] = None, name: Optional[str] = None
    ) -> Union[type, Callable[[type], type]]:
        """Make a class resolvable by a short name.

        Can be called directly or used as a decorator, with or without a name.

        Args:
            cls: The class to register.
            name: The name to register it under; defaults to the class name.

        Example:
            >>> @resolver.register_type(name="storage")
            ... class SqlStorage(Storage): ...
            >>> resolver.bind(Storage, "storage")
        """

        def decorator(target: type) -> type:
            registered_name = name or target.__name__
            self._names[registered_name] = target
            logger.debug("Registered %s as '%s'", target.__qualname__, registered_name)
            return target

        if cls is None:
            return decorator
        return decorator(cls)

    def bind(self, abstract: TypeKey, concrete: TypeKey):
        """Resolve requests for ``abstract`` to ``concrete``.

        The concrete key is not looked up until it is needed, and is not checked
        to actually implement ``abstract``. Binding the same abstract class again
        replaces the previous binding.

        Raises:
            TypeNotFoundError: If ``abstract`` does not name a class.
        """
        abstract_cls = self.lookup(abstract)
        self._bindings[abstract_cls] = concrete
        logger.debug("Bound %s to %s", abstract_cls.__qualname__, _describe(concrete))

    def implementation_of(self, abstract: TypeKey) -> Callable[[type], type]:
        """Decorator binding ``abstract`` to the decorated class.

        Example:
            >>> @resolver.implementation_of(Storage)
            ... class SqlStorage(Storage): ...
        """

        def decorator(cls: type) -> type:
            self.bind(abstract, cls)
            return cls

        return decorator

    def configure(self, key: TypeKey, store: Union[ConfigStore, Mapping[str, Any]]):
        """Register the configuration for exactly the class named by ``key``.

        Replaces, rather than merges with, any store previously registered for
        the same class. Stores registered for ancestor classes are merged in at
        resolution time.

        Args:
            key: The class to configure.
            store: A ConfigStore, or a mapping copied into a new one.
        """
        cls = self.lookup(key)
        if not isinstance(store, ConfigStore):
            store = ConfigStore.from_mapping(store)
        self._configuration[cls] = store
        logger.debug("Configured %s with keys %s", cls.__qualname__, list(store))

    def factory(self, key: TypeKey, func: Factory):
        """Construct the class named by ``key`` with ``func`` instead of its constructor.

        ``func`` receives the arguments resolved for the class's constructor.
        """
        self._constructor.register(self.lookup(key), func)

    def provides(self, key: TypeKey) -> Callable[[Factory], Factory]:
        """Decorator registering the decorated function as the factory for ``key``.

        Example:
            >>> @resolver.provides(Connection)
            ... def make_connection(url: str) -> Connection:
            ...     return Connection.open(url)
        """

        def decorator(func: Factory) -> Factory:
            self.factory(key, func)
            return func

        return decorator

    def is_resolved(self, key: TypeKey) -> bool:
        """Whether an instance has already been built for ``key``."""
        try:
            cls = self.lookup(key)
        except TypeNotFoundError:
            return False
        return cls in self._cache

    def instantiate(self, key: TypeKey) -> Any:
        """Return the instance for ``key``, building it and its dependencies if needed.

        Args:
            key: The class to instantiate, or a name for it.

        Returns:
            The single instance of the class, or of the implementation bound to it.

        Raises:
            TypeNotFoundError: If the class, its bound implementation or a dependency
                cannot be found.
            NoImplementationBoundError: If an abstract class with no binding is needed.
            MissingConfigurationError: If a required parameter has no configuration
                and no default.
            UnresolvableParameterError: If a required parameter's annotation cannot
                be evaluated.
        """
        with self._lock:
            return self._instantiate(key)

    def merged_configuration(self, key: TypeKey) -> ConfigStore:
        """Fold the configuration of a class's ancestors and the class itself.

        Stores are folded from the most distant ancestor to the class, so entries
        registered closer to the class win over same-named entries further away.

        Returns:
            A new ConfigStore; the registered stores are left untouched.
        """
        cls = self.lookup(key)
        merged = ConfigStore()
        for ancestor in [*self._introspector.ancestors(cls), cls]:
            store = self._configuration.get(ancestor)
            if store is not None:
                merged.merge(store)
        return merged

    def _instantiate(self, key: TypeKey) -> Any:
        cls = self.lookup(key)
        if cls in self._cache:
            logger.debug("Using cached instance of %s", cls.__qualname__)
            return self._cache[cls]

        alias = None
        if self._introspector.is_abstract(cls):
            if cls not in self._bindings:
                raise NoImplementationBoundError(cls)
            alias, cls = cls, self.lookup(self._bindings[cls])
            logger.debug("Resolving %s through %s", alias.__qualname__, cls.__qualname__)
            if cls in self._cache:
                return self._cache.store(cls, self._cache[cls], alias)

        parameters = self._introspector.parameters(cls)
        if not parameters:
            return self._cache.store(cls, self._constructor.construct(cls, []), alias)

        configuration = self.merged_configuration(cls)
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter in parameters:
            values = self._resolve_parameter(cls, parameter, configuration)
            if parameter.keyword_only:
                kwargs.update((parameter.name, value) for value in values)
            else:
                args.extend(values)

        return self._cache.store(cls, self._constructor.construct(cls, args, kwargs), alias)

    def _resolve_parameter(
        self, cls: type, parameter: Parameter, configuration: ConfigStore
    ) -> list[Any]:
        """Work out the argument values for one constructor parameter.

        Returns:
            The values to pass: exactly one, except for variadic parameters.
        """
        name = parameter.name

        if parameter.unresolvable:
            if not parameter.optional:
                raise UnresolvableParameterError(cls, name, parameter.unresolvable)
            return self._fallback(cls, parameter)

        if not parameter.is_object:
            if configuration.has(name):
                return _expand(parameter, configuration.get(name))
            return self._fallback(cls, parameter)

        if configuration.has(name):
            value = configuration.get(name)
            if self._is_type_reference(value):
                return [self._instantiate(value)]
            return [
                self._instantiate(item) if self._is_type_reference(item) else item
                for item in _expand(parameter, value)
            ]

        try:
            return [self._instantiate(parameter.declared_type)]
        except NoImplementationBoundError as exc:
            if not parameter.optional or exc.abstract is not parameter.declared_type:
                raise
            logger.debug(
                "No implementation bound for optional parameter '%s' of %s, using fallback",
                name,
                cls.__qualname__,
            )
            return self._fallback(cls, parameter)

    def _fallback(self, cls: type, parameter: Parameter) -> list[Any]:
        if parameter.has_default:
            return [parameter.default]
        if parameter.variadic:
            return []
        if parameter.optional:
            return [None]
        raise MissingConfigurationError(cls, parameter.name)

    def _is_type_reference(self, value: Any) -> bool:
        if inspect.isclass(value):
            return True
        if not isinstance(value, str):
            return False
        try:
            self.lookup(value)
        except TypeNotFoundError:
            return False
        return True


def _expand(parameter: Parameter, value: Any) -> list[Any]:
    if parameter.variadic and isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _describe(key: TypeKey) -> str:
    return key.__qualname__ if inspect.isclass(key) else repr(key)
