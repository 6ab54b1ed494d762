"""High level entry points for constructing resolvers."""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from bootwire.domain import TypeKey
from bootwire.errors import ConfigurationFileError
from bootwire.introspection import TypeIntrospector
from bootwire.resolver import Resolver

__all__ = ["make_resolver", "load_configuration"]

logger = logging.getLogger(__name__)


def make_resolver(
    bindings: Optional[Mapping[TypeKey, TypeKey]] = None,
    configuration: Optional[Mapping[TypeKey, Mapping[str, Any]]] = None,
    introspector: Optional[TypeIntrospector] = None,
) -> Resolver:
    """Create a :class:`Resolver` with bindings and configuration already registered.

    Args:
        bindings: Mapping from abstract classes (or their names) to implementations.
        configuration: Mapping from classes (or their names) to the configuration
            values for their constructor parameters.
        introspector: An optional introspector; defaults to reflection on live classes.

    Returns:
        The populated resolver.

    Raises:
        TypeNotFoundError: If a bound abstract class or a configured class cannot be found.

    Example:
        >>> resolver = make_resolver(
        ...     bindings={Storage: SqlStorage},
        ...     configuration={SqlStorage: {"url": "sqlite://"}},
        ... )
        >>> resolver.instantiate(Storage)
    """
    resolver = Resolver(introspector)
    for abstract, concrete in (bindings or {}).items():
        resolver.bind(abstract, concrete)
    for key, values in (configuration or {}).items():
        resolver.configure(key, values)
    return resolver


def load_configuration(resolver: Resolver, path: Union[str, Path]) -> Resolver:
    """Register bindings and configuration read from a YAML file.

    The document may contain a ``bindings`` section mapping abstract class paths to
    implementation paths, and a ``configuration`` section mapping class paths to the
    values for their constructor parameters:

        bindings:
          myapp.storage:Storage: myapp.storage.sql:SqlStorage
        configuration:
          myapp.http:Server:
            host: 0.0.0.0
            port: 8080

    Args:
        resolver: The resolver to populate.
        path: Location of the YAML file.

    Returns:
        The same resolver.

    Raises:
        FileNotFoundError: If there is no file at ``path``.
        ConfigurationFileError: If the document or one of its sections is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise ConfigurationFileError(f"Config file {path} must contain a mapping")

    bindings = _section(document, "bindings", path)
    configuration = _section(document, "configuration", path)

    for abstract, concrete in bindings.items():
        resolver.bind(abstract, concrete)
    for key, values in configuration.items():
        if not isinstance(values, dict):
            raise ConfigurationFileError(
                f"Configuration for {key} in {path} must be a mapping"
            )
        resolver.configure(key, values)

    logger.debug(
        "Loaded %d bindings and %d configured classes from %s",
        len(bindings),
        len(configuration),
        path,
    )
    return resolver


def _section(document: dict, name: str, path: Path) -> dict:
    section = document.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationFileError(f"Section '{name}' of {path} must be a mapping")
    return section
