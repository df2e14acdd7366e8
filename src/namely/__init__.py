"""Namely: a name-keyed dependency registry.

Namely resolves names to values at runtime. Values are registered as constants,
classes instantiated on every lookup, lazily built singletons, or provider
functions. Classes and providers declare what they need by parameter name, and
those names are resolved recursively from the same registry or from the registries
it extends.

Key Features:
    - Constants, classes, singletons and providers under one name space
    - Parameters bound by their own name, a ``Ref`` default or ``Annotated`` metadata
    - Hook methods and prefixed ``inject*`` methods called after construction
    - Chained registries, most recently extended first
    - Quoted names (``"'json'"``) loaded from an external source

Basic Usage:
    >>> from namely import Registry, Ref
    >>>
    >>> registry = Registry()
    >>> registry.put_constant("databaseUrl", "sqlite://")
    >>>
    >>> @registry.provides(singleton=True)
    ... class Database:
    ...     def inject(self, url=Ref("databaseUrl")):
    ...         self.url = url
    >>>
    >>> registry.get_injectable("database").url  # Returns "sqlite://"

The package consists of several modules:
    - registry: Registration, resolution, construction and extension
    - parameters: Introspection of injectable parameters
    - injection: Argument resolution and prefixed method discovery
    - options: Registry configuration
    - domain: Core domain models (bindings, descriptors, markers)
    - errors: Package-specific exceptions

Logging goes through loguru and is disabled by default; call
``logger.enable("namely")`` to see it.
"""

from loguru import logger

from namely.domain import UNDEFINED, BindingKind, ParamDescriptor, Ref, Resolver
from namely.errors import (
    CircularDependencyError,
    ConfigurationError,
    DuplicateNameError,
    ExtensionCapabilityError,
    ExtensionCycleError,
    ExternalReferenceError,
    InjectionError,
    InvalidNameError,
    NotFoundError,
    NotInvocableError,
    RegistryError,
    RelativeReferenceError,
    StrictParameterError,
)
from namely.options import RegistryOptions
from namely.parameters import describe_parameters
from namely.registry import Registry, inferred_name

__all__ = [
    "UNDEFINED",
    "BindingKind",
    "ParamDescriptor",
    "Ref",
    "Resolver",
    "Registry",
    "RegistryOptions",
    "describe_parameters",
    "inferred_name",
    "RegistryError",
    "ConfigurationError",
    "InvalidNameError",
    "DuplicateNameError",
    "NotInvocableError",
    "NotFoundError",
    "ExternalReferenceError",
    "RelativeReferenceError",
    "StrictParameterError",
    "InjectionError",
    "ExtensionCapabilityError",
    "ExtensionCycleError",
    "CircularDependencyError",
]

logger.disable("namely")
