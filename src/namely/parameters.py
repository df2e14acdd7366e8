"""Introspection of the injectable parameters a callable declares."""

import inspect
from typing import (
    Annotated,
    Any,
    Callable,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from namely.domain import ParamDescriptor, Ref

__all__ = ["describe_parameters", "bound_name_of"]

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def describe_parameters(func: Callable) -> list[ParamDescriptor]:
    """Extract a descriptor for every injectable parameter of ``func``.

    Classes are described by their constructor, without ``self``. Bound methods
    are described without their receiver. ``*args`` and ``**kwargs`` are never
    injected and are left out.

    A parameter is bound to a registry name either by a :class:`Ref` default or by
    string metadata on an ``Annotated`` annotation. The default value itself is
    only inspected, never called.

    Args:
        func: A class, function, method or other callable.

    Returns:
        Descriptors in declaration order.

    Example:
        >>> def make_greeting(greeting=Ref("helloMessage"), name: Annotated[str, "user"] = "", punctuation=""):
        ...     pass
        >>> describe_parameters(make_greeting)
        >>> # Returns:
        >>> # [ParamDescriptor(0, "greeting", "helloMessage"),
        >>> #  ParamDescriptor(1, "name", "user"),
        >>> #  ParamDescriptor(2, "punctuation", None)]
    """
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without introspectable signatures take nothing we can inject
        return []

    hints = _type_hints(func)
    return [
        ParamDescriptor(
            position,
            name,
            bound_name_of(param, hints.get(name, param.annotation)),
            param.kind is inspect.Parameter.KEYWORD_ONLY,
        )
        for position, (name, param) in enumerate(sig.parameters.items())
        if param.kind not in _SKIPPED_KINDS
    ]


def bound_name_of(param: inspect.Parameter, annotation: Any) -> Optional[str]:
    if isinstance(param.default, Ref):
        return param.default.name

    if get_origin(annotation) is Union:
        # get_type_hints wraps Annotated in Optional for None defaults before 3.11
        annotation = next(
            (a for a in get_args(annotation) if get_origin(a) is Annotated), annotation
        )

    if get_origin(annotation) is Annotated:
        _, *metadata = get_args(annotation)
        return next((m for m in metadata if isinstance(m, str)), None)

    return None


def _type_hints(func: Callable) -> dict[str, Any]:
    target = func.__init__ if inspect.isclass(func) else func
    try:
        return get_type_hints(target, include_extras=True)
    except Exception:
        # unresolvable forward references; fall back to the raw annotations
        return {}
