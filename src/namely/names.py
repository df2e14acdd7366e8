"""Validation of registration names."""

import re
from typing import Mapping

from namely.domain import Binding
from namely.errors import DuplicateNameError, InvalidNameError

__all__ = ["is_valid_name", "validate_name"]

_NAME_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def is_valid_name(name: object) -> bool:
    """Check whether ``name`` is an acceptable registration name.

    Example:
        >>> is_valid_name("helloThere")   # True
        >>> is_valid_name("$hello_there") # True
        >>> is_valid_name("hello-there")  # False
    """
    return isinstance(name, str) and _NAME_PATTERN.fullmatch(name) is not None


def validate_name(
    name: object, bindings: Mapping[str, Binding], registry_name: str
) -> str:
    """Ensure ``name`` can be registered alongside the given bindings.

    Args:
        name: The candidate name.
        bindings: Every binding already held by the registry, of any kind.
        registry_name: Label of the registry, for error messages.

    Returns:
        The validated name.

    Raises:
        InvalidNameError: If the name does not match the identifier grammar.
        DuplicateNameError: If the name is already registered under any kind.
    """
    if not is_valid_name(name):
        raise InvalidNameError(
            f"Invalid name {name!r}: names must start with a letter, '_' or '$' "
            "and contain only letters, digits, '_' or '$'"
        )

    existing = bindings.get(name)
    if existing is not None:
        raise DuplicateNameError(name, existing.kind.value, registry_name)

    return name
