"""Exceptions raised by registries while registering, resolving and injecting."""

from typing import Iterable, Optional, Sequence

__all__ = [
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


class RegistryError(Exception):
    """Base class for every error raised by a registry."""

    pass


class ConfigurationError(RegistryError):
    """Raised when registry options are malformed."""

    pass


class InvalidNameError(RegistryError):
    """Raised when a name is not a valid identifier or is already registered."""

    pass


class DuplicateNameError(InvalidNameError):
    def __init__(self, name: str, kind: str, registry_name: str):
        self.name = name
        self.kind = kind
        super().__init__(
            f"Registry <{registry_name}>: can not override {kind} '{name}'"
        )


class NotInvocableError(RegistryError, TypeError):
    """Raised when a class, singleton or provider registration target is not callable."""

    pass


class NotFoundError(RegistryError, LookupError):
    """Raised when a name cannot be resolved by a registry or anything it extends.

    Attributes:
        name: The name that was looked up.
        tried: Every candidate name that was attempted, in order.
    """

    def __init__(
        self,
        name: str,
        registry_name: Optional[str] = None,
        tried: Optional[Sequence[str]] = None,
    ):
        self.name = name
        self.tried = list(tried) if tried else [name]
        location = f" in registry <{registry_name}>" if registry_name else ""
        if len(self.tried) > 1:
            attempted = " nor ".join(f"'{t}'" for t in self.tried)
            message = f"Neither {attempted} is registered{location}"
        else:
            message = f"'{name}' is not registered{location}"
        super().__init__(message)


class ExternalReferenceError(RegistryError):
    """Raised when a quoted external reference cannot be loaded."""

    def __init__(self, reference: str, message: Optional[str] = None):
        self.reference = reference
        super().__init__(
            message or f"Cannot load external reference '{reference}'"
        )


class RelativeReferenceError(ExternalReferenceError):
    def __init__(self, reference: str):
        super().__init__(
            reference,
            f"Cannot resolve external reference '{reference}' from a relative path",
        )


class StrictParameterError(RegistryError, TypeError):
    """Raised in strict mode when a parameter has no explicit dependency binding."""

    def __init__(self, parameter: str, owner: str):
        self.parameter = parameter
        super().__init__(
            f"Parameter '{parameter}' of {owner} has no dependency binding and "
            "name-based injection is disabled (only_default_param=True).\n"
            "Replace:\n\n"
            f"    def inject(self, {parameter}): ...\n\n"
            "with:\n\n"
            f"    def inject(self, {parameter}=Ref(\"{parameter}\")): ...\n\n"
            "or annotate the parameter with Annotated[..., "
            f"\"{parameter}\"]."
        )


class InjectionError(RegistryError):
    """Raised when an instance cannot be constructed with the requested arguments."""

    pass


class ExtensionCapabilityError(RegistryError, TypeError):
    def __init__(self, other: object, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"{other!r} cannot be extended: missing callable members {self.missing}"
        )


class ExtensionCycleError(RegistryError):
    """Raised when extending a registry would make it reachable from itself."""

    pass


class CircularDependencyError(RegistryError):
    """Raised when a name is needed, directly or indirectly, to resolve itself."""

    def __init__(self, path: Sequence[str]):
        self.path = list(path)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.path)}")
