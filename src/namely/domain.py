"""Domain models used throughout the package."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Protocol, Union, runtime_checkable

__all__ = [
    "UNDEFINED",
    "BindingKind",
    "Constant",
    "ClassBinding",
    "SingletonBinding",
    "FactoryBinding",
    "Binding",
    "ParamDescriptor",
    "Ref",
    "Resolver",
]


class _Undefined:
    """Stands for a value that was never supplied.

    ``None`` is an ordinary value for a registry; ``UNDEFINED`` is not. A constant
    registered as ``UNDEFINED`` claims its name but never resolves.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


class BindingKind(str, Enum):
    CONSTANT = "constant"
    CLASS = "class"
    SINGLETON = "singleton"
    PROVIDER = "provider"


@dataclass(frozen=True)
class Constant:
    """A value returned verbatim on every resolution."""

    value: Any
    kind: ClassVar[BindingKind] = BindingKind.CONSTANT

    @property
    def is_defined(self) -> bool:
        return self.value is not UNDEFINED


@dataclass(frozen=True)
class ClassBinding:
    """A class instantiated afresh on every resolution."""

    target: type
    kind: ClassVar[BindingKind] = BindingKind.CLASS


@dataclass(frozen=True)
class SingletonBinding:
    """A class instantiated on first resolution, then served from the cache."""

    target: type
    kind: ClassVar[BindingKind] = BindingKind.SINGLETON


@dataclass(frozen=True)
class FactoryBinding:
    """A callable invoked with resolved arguments on every resolution."""

    target: Callable
    kind: ClassVar[BindingKind] = BindingKind.PROVIDER


Binding = Union[Constant, ClassBinding, SingletonBinding, FactoryBinding]


@dataclass(frozen=True)
class ParamDescriptor:
    """Describes one injectable parameter of a callable.

    Attributes:
        position: Index of the parameter in the callable's signature.
        name: The declared parameter name.
        bound_name: The registry name the parameter is explicitly bound to, if any.
        keyword_only: Whether the parameter must be passed by keyword.
    """

    position: int
    name: str
    bound_name: Optional[str] = None
    keyword_only: bool = False


@dataclass(frozen=True)
class Ref:
    """Default-value marker binding a parameter to a registry name.

    Example:
        >>> class Greeter:
        ...     def inject(self, message=Ref("helloMessage")):
        ...         self.message = message
    """

    name: str


@runtime_checkable
class Resolver(Protocol):
    """The capability a registry needs from anything it extends."""

    def get_injectable(self, name: str) -> Any: ...

    def contains_injectable(self, name: str) -> bool: ...
