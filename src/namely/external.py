"""Quoted references to values living outside any registry.

A name wrapped in a matching pair of single or double quotes, such as ``"'json'"``,
is not looked up in a registry at all: the unquoted text is handed to an external
source, by default :func:`importlib.import_module`.
"""

import importlib
from typing import Any, Callable, Optional

from loguru import logger

from namely.errors import ExternalReferenceError, RelativeReferenceError

__all__ = ["ExternalSource", "unquote", "load_external"]

ExternalSource = Callable[[str], Any]

_QUOTES = ("'", '"')


def unquote(name: str) -> Optional[str]:
    """Return the text inside matching quotes, or None if ``name`` is not quoted.

    Example:
        >>> unquote("'json'")  # Returns "json"
        >>> unquote('"os.path"')  # Returns "os.path"
        >>> unquote("json")  # Returns None
    """
    if len(name) >= 2 and name[0] in _QUOTES and name[-1] == name[0]:
        return name[1:-1]
    return None


def load_external(reference: str, source: Optional[ExternalSource] = None) -> Any:
    """Load an external value by its unquoted reference.

    Raises:
        RelativeReferenceError: If the reference starts with '.'.
        ExternalReferenceError: If the source fails to produce the value.
    """
    if reference.startswith("."):
        raise RelativeReferenceError(reference)

    source = source or importlib.import_module
    logger.debug("Loading external reference '{}'", reference)
    try:
        return source(reference)
    except ExternalReferenceError:
        raise
    except (ImportError, LookupError, ValueError) as e:
        raise ExternalReferenceError(
            reference, f"Cannot load external reference '{reference}': {e}"
        ) from e
