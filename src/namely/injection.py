"""Helpers turning declared parameters and prefixed methods into injected values."""

import inspect
from typing import Any, Callable, Iterator

from namely.domain import ParamDescriptor
from namely.errors import StrictParameterError

__all__ = [
    "resolve_arguments",
    "prefixed_methods",
    "candidate_names",
    "describe_owner",
]


def resolve_arguments(
    descriptors: list[ParamDescriptor],
    resolve: Callable[[str], Any],
    only_default_param: bool,
    owner: str,
) -> tuple[list[Any], dict[str, Any]]:
    """Resolve a value for every descriptor, in declared order.

    Args:
        descriptors: Parameters as produced by ``describe_parameters``.
        resolve: Resolves a registry name to a value.
        only_default_param: If True, parameters without an explicit binding are an error
            rather than being resolved by their own name.
        owner: Description of the callable, for error messages.

    Returns:
        Positional arguments and keyword-only arguments.

    Raises:
        StrictParameterError: If strict mode is on and a parameter has no binding.
    """
    args: list[Any] = []
    kwargs: dict[str, Any] = {}

    for descriptor in descriptors:
        if descriptor.bound_name is not None:
            dependency_name = descriptor.bound_name
        elif not only_default_param:
            dependency_name = descriptor.name
        else:
            raise StrictParameterError(descriptor.name, owner)

        value = resolve(dependency_name)
        if descriptor.keyword_only:
            kwargs[descriptor.name] = value
        else:
            args.append(value)

    return args, kwargs


def prefixed_methods(cls: type, prefix: str) -> Iterator[str]:
    """Yield the names of methods declared directly on ``cls`` that start with ``prefix``.

    Methods are yielded in declaration order. A method named exactly ``prefix`` is
    skipped, as are inherited methods. The class namespace is copied first, so
    injected methods may set class attributes.
    """
    for name, member in list(vars(cls).items()):
        if name == prefix or not name.startswith(prefix):
            continue
        if inspect.isfunction(member) or inspect.ismethoddescriptor(member):
            yield name


def candidate_names(method_name: str, prefix: str) -> list[str]:
    """Derive the dependency names a prefixed method may be injected with.

    Example:
        >>> candidate_names("injectHelloWorld", "inject")   # ["helloWorld", "HelloWorld"]
        >>> candidate_names("inject_hello", "inject")       # ["hello"]
        >>> candidate_names("inject_Hello", "inject")       # ["hello", "Hello"]
    """
    suffix = method_name[len(prefix):]
    if suffix.startswith("_") and len(suffix) > 1:
        suffix = suffix[1:]

    lower_camel = suffix[0].lower() + suffix[1:]
    return [lower_camel] if lower_camel == suffix else [lower_camel, suffix]


def describe_owner(func: Callable) -> str:
    return getattr(func, "__qualname__", None) or repr(func)
