"""Registration and resolution of named injectables."""

import inspect
import itertools
import threading
import types
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Union

from loguru import logger

from namely.domain import (
    Binding,
    BindingKind,
    ClassBinding,
    Constant,
    FactoryBinding,
    Resolver,
    SingletonBinding,
)
from namely.errors import (
    CircularDependencyError,
    ConfigurationError,
    ExtensionCapabilityError,
    ExtensionCycleError,
    InjectionError,
    NotFoundError,
    NotInvocableError,
)
from namely.external import ExternalSource, load_external, unquote
from namely.injection import (
    candidate_names,
    describe_owner,
    prefixed_methods,
    resolve_arguments,
)
from namely.names import validate_name
from namely.options import RegistryOptions, make_options
from namely.parameters import describe_parameters

__all__ = ["Registry", "inferred_name"]

_ids = itertools.count()

_RESOLVER_MEMBERS = ("get_injectable", "contains_injectable")

_CALLABLE_BINDINGS = {
    BindingKind.CLASS: ClassBinding,
    BindingKind.SINGLETON: SingletonBinding,
    BindingKind.PROVIDER: FactoryBinding,
}


def inferred_name(target: Any) -> str:
    """Derive a registry name from a class or function.

    Args:
        target: The function or class to derive a name from.

    Returns:
        The class name with its first letter lower-cased, or the function name
        with any 'make_' prefix removed.

    Example:
        >>> inferred_name(UserService)    # Returns "userService"
        >>> inferred_name(make_database)  # Returns "database"
        >>> inferred_name(greeting)       # Returns "greeting"
    """
    if inspect.isclass(target):
        return target.__name__[0].lower() + target.__name__[1:]

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__


class Registry:
    """Registry of named constants, classes, singletons and providers.

    Names resolve to values on demand. Classes, singletons and providers have their
    own parameters resolved by name from the same registry, and from the registries
    it extends when a name is not held locally.

    Attributes:
        options: The validated options of this registry.
        id: Process-unique, increasing identifier.
        name: Diagnostic label; defaults to "unnamed <id>".

    Example:
        >>> registry = Registry()
        >>> registry.put_constant("greeting", "Hello")
        >>>
        >>> @registry.provides()
        ... def make_message(greeting, name=Ref("userName")):
        ...     return f"{greeting} {name}"
        >>>
        >>> registry.put_constant("userName", "Dominic")
        >>> registry.get_injectable("message")  # Returns "Hello Dominic"
    """

    def __init__(
        self,
        options: Union[RegistryOptions, Mapping[str, Any], None] = None,
        *,
        external_source: Optional[ExternalSource] = None,
        **overrides: Any,
    ):
        self.options = make_options(options, **overrides)
        self.id = next(_ids)
        self.name = self.options.name or f"unnamed {self.id}"

        self._external_source = external_source
        self._bindings: dict[str, Binding] = {}
        self._singleton_instances: dict[str, Any] = {}
        self._extends: list[Resolver] = []
        self._lock = threading.RLock()
        self._resolving = threading.local()

        logger.debug("Created registry <{}> with {}", self.name, self.options)

    @property
    def constructor_injection(self) -> bool:
        return self.options.constructor_injection

    @property
    def extended(self) -> tuple[Resolver, ...]:
        """Registries consulted when a name is not held locally, in the order added."""
        return tuple(self._extends)

    # Registration

    def put(self, kind: Union[BindingKind, str], name: str, target: Any) -> None:
        """Register ``target`` under ``name`` as the given kind of binding.

        Args:
            kind: A BindingKind, or one of "constant", "class", "singleton", "provider".
            name: The registry name; must be a valid identifier not yet registered.
            target: The constant value, or the class or callable to register.

        Raises:
            InvalidNameError: If the name is invalid or already registered.
            NotInvocableError: If a class, singleton or provider target is not callable.
        """
        kind = BindingKind(kind)
        with self._lock:
            validate_name(name, self._bindings, self.name)
            if kind is BindingKind.CONSTANT:
                binding = Constant(target)
            elif callable(target):
                binding = _CALLABLE_BINDINGS[kind](target)
            else:
                raise NotInvocableError(
                    f"Registry <{self.name}>: {kind.value} '{name}' must be callable, got {target!r}"
                )
            self._bindings[name] = binding

        logger.debug("Registry <{}>: registered {} '{}'", self.name, kind.value, name)

    def put_constant(self, name: str, value: Any) -> None:
        self.put(BindingKind.CONSTANT, name, value)

    def put_class(self, name: str, cls: type) -> None:
        self.put(BindingKind.CLASS, name, cls)

    def put_singleton(self, name: str, cls: type) -> None:
        self.put(BindingKind.SINGLETON, name, cls)

    def put_provider(self, name: str, func: Callable) -> None:
        self.put(BindingKind.PROVIDER, name, func)

    def provides(self, name: Optional[str] = None, singleton: bool = False) -> Callable:
        """Decorator to register a class or function.

        Classes are registered as classes (or singletons, if ``singleton`` is set);
        functions are registered as providers.

        Args:
            name: Optional registry name; defaults to ``inferred_name(target)``.
            singleton: Register a class as a singleton.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Example:
            @registry.provides(singleton=True)
            class Database:
                def inject(self, url=Ref("databaseUrl")):
                    self.url = url
        """

        def decorator(obj):
            provided_name = name or inferred_name(obj)
            if inspect.isclass(obj):
                kind = BindingKind.SINGLETON if singleton else BindingKind.CLASS
            elif singleton:
                raise ConfigurationError(f"{obj!r} is not a class and cannot be a singleton")
            elif inspect.isfunction(obj) or inspect.ismethod(obj):
                kind = BindingKind.PROVIDER
            else:
                raise NotInvocableError(f"{obj!r} is not a class or function")

            self.put(kind, provided_name, obj)
            return obj

        return decorator

    # Resolution

    def get_injectable(self, name: str) -> Any:
        """Resolve ``name`` to a value.

        Quoted names (``"'json'"``) are loaded from the external source. Otherwise the
        name is looked up as a constant, class, cached or uncached singleton, or
        provider, then in extended registries, most recently extended first.

        Raises:
            NotFoundError: If neither this registry nor any it extends holds the name.
            ExternalReferenceError: If a quoted reference cannot be loaded.
            CircularDependencyError: If the name is needed to resolve itself.
        """
        reference = unquote(name) if isinstance(name, str) else None
        if reference is not None:
            return load_external(reference, self._external_source)

        with self._tracking(name):
            logger.trace("Registry <{}>: resolving '{}'", self.name, name)
            return self._resolve(name)

    def contains_injectable(self, name: str) -> bool:
        """Check whether ``name`` can be resolved here or in an extended registry.

        Quoted external references are not considered. Never changes registry state.
        """
        binding = self._bindings.get(name)
        if binding is not None and _is_resolvable(binding):
            return True
        if name in self._singleton_instances:
            return True
        return any(other.contains_injectable(name) for other in reversed(self.extended))

    def _resolve(self, name: str) -> Any:
        binding = self._bindings.get(name)

        if isinstance(binding, Constant) and binding.is_defined:
            return binding.value
        if isinstance(binding, ClassBinding):
            return self.apply_inject(binding.target)
        if name in self._singleton_instances:
            return self._singleton_instances[name]
        if isinstance(binding, SingletonBinding):
            return self._build_singleton(name, binding)
        if isinstance(binding, FactoryBinding):
            return self.inject_function(binding.target)

        for other in reversed(self.extended):
            if other.contains_injectable(name):
                return other.get_injectable(name)

        raise NotFoundError(name, self.name)

    def _build_singleton(self, name: str, binding: SingletonBinding) -> Any:
        with self._lock:
            # another thread may have built it while we waited
            if name in self._singleton_instances:
                return self._singleton_instances[name]

            instance = self.apply_inject(binding.target, [])
            self._singleton_instances[name] = instance

        logger.debug("Registry <{}>: constructed singleton '{}'", self.name, name)
        return instance

    @contextmanager
    def _tracking(self, name: str) -> Iterator[None]:
        stack = getattr(self._resolving, "stack", None)
        if stack is None:
            stack = self._resolving.stack = []

        if name in stack:
            raise CircularDependencyError(stack[stack.index(name):] + [name])

        stack.append(name)
        try:
            yield
        finally:
            stack.pop()

    # Construction

    def inject(self, cls: type, *args: Any) -> Any:
        """Construct ``cls`` with the given arguments, then inject its methods."""
        return self.apply_inject(cls, args)

    def apply_inject(self, cls: type, args: Sequence[Any] = ()) -> Any:
        """Construct ``cls`` and inject its prefixed methods and hook method.

        In constructor-injection mode the constructor's parameters are resolved from
        the registry and ``args`` must be empty. Otherwise ``args`` are passed to the
        constructor as they are.

        Args:
            cls: The class to construct.
            args: Explicit constructor arguments.

        Returns:
            The constructed and injected instance.

        Raises:
            InjectionError: If explicit arguments are given in constructor-injection mode.
        """
        args = list(args)
        kwargs: dict[str, Any] = {}

        if self.constructor_injection:
            if args:
                raise InjectionError(
                    f"Cannot combine explicit arguments with constructor injection for {cls!r}"
                )
            args, kwargs = self._resolve_parameters(cls)

        instance = cls(*args, **kwargs)

        self.inject_prefixed_methods(cls, instance)
        self.inject_hook_method(instance)

        return instance

    def inject_function(self, func: Callable, this: Any = None) -> Any:
        """Call ``func`` with its parameters resolved from the registry.

        Args:
            func: The function to call.
            this: If given, ``func`` is bound to it and receives it as first argument.

        Returns:
            Whatever ``func`` returns.
        """
        if not callable(func):
            raise NotInvocableError(f"{func!r} is not callable")
        if this is not None:
            func = types.MethodType(func, this)

        args, kwargs = self._resolve_parameters(func)
        return func(*args, **kwargs)

    def inject_prefixed_methods(self, cls: type, instance: Any) -> Any:
        """Call every prefixed method declared on ``cls`` with its matching dependency.

        A method ``injectHelloWorld`` (or ``inject_hello_world``) receives the value
        registered as ``helloWorld``, falling back to ``HelloWorld`` (``hello_world``).

        Raises:
            ConfigurationError: If the prefix is neither a non-empty string nor False.
            NotFoundError: If no candidate name is registered for a prefixed method.
        """
        prefix = self.options.inject_prefix
        if prefix is False:
            return instance
        # options built with model_construct skip validation
        if not isinstance(prefix, str) or not prefix:
            raise ConfigurationError(f"inject_prefix must be a non-empty string or False, got {prefix!r}")

        for method_name in prefixed_methods(cls, prefix):
            candidates = candidate_names(method_name, prefix)
            dependency_name = next(
                (c for c in candidates if self.contains_injectable(c)), None
            )
            if dependency_name is None:
                raise NotFoundError(candidates[0], self.name, tried=candidates)

            getattr(instance, method_name)(self.get_injectable(dependency_name))

        return instance

    def inject_hook_method(self, instance: Any) -> Any:
        """Call the configured hook method of ``instance``, if it has one."""
        method_name = self.options.inject_method
        if method_name is False or self.constructor_injection:
            return instance

        hook = getattr(instance, method_name, None)
        if not callable(hook):
            return instance

        args, kwargs = self._resolve_parameters(hook)
        hook(*args, **kwargs)
        return instance

    def _resolve_parameters(self, func: Callable) -> tuple[list[Any], dict[str, Any]]:
        return resolve_arguments(
            describe_parameters(func),
            self.get_injectable,
            self.options.only_default_param,
            describe_owner(func),
        )

    # Extension

    def extend(self, other: Resolver) -> None:
        """Consult ``other`` for names this registry does not hold.

        Registries extended later take precedence over those extended earlier.

        Raises:
            ExtensionCapabilityError: If ``other`` lacks callable ``get_injectable``
                and ``contains_injectable`` members.
            ExtensionCycleError: If ``other`` is this registry or already extends it.
        """
        missing = [m for m in _RESOLVER_MEMBERS if not callable(getattr(other, m, None))]
        if missing:
            raise ExtensionCapabilityError(other, missing)

        with self._lock:
            if _reaches(other, self):
                raise ExtensionCycleError(
                    f"Registry <{self.name}> cannot extend {other!r}: it would extend itself"
                )
            self._extends.append(other)

        logger.debug("Registry <{}>: extended {!r}", self.name, other)

    def __getitem__(self, name: str) -> Any:
        return self.get_injectable(name)

    def __contains__(self, name: str) -> bool:
        return self.contains_injectable(name)

    def __repr__(self) -> str:
        return f"<Registry {self.name!r} id={self.id}>"


def _is_resolvable(binding: Binding) -> bool:
    return not isinstance(binding, Constant) or binding.is_defined


def _reaches(start: Any, target: Registry) -> bool:
    """Check whether ``target`` is ``start`` or is reachable through registries it extends."""
    pending, seen = [start], set()
    while pending:
        current = pending.pop()
        if current is target:
            return True
        if id(current) in seen or not isinstance(current, Registry):
            continue
        seen.add(id(current))
        pending.extend(current.extended)
    return False
