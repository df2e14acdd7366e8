"""Registry configuration using Pydantic.

Options may be given as a :class:`RegistryOptions`, a mapping, or keyword
arguments to :class:`~namely.registry.Registry`. Camel-case keys
(``injectPrefix``, ``injectMethod``, ``onlyDefaultParam``) are accepted as aliases.
"""

from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from namely.errors import ConfigurationError

__all__ = ["CONSTRUCTOR", "RegistryOptions", "make_options"]

CONSTRUCTOR = "constructor"


class RegistryOptions(BaseModel):
    """Options controlling how a registry injects dependencies."""

    inject_prefix: Union[Literal[False], str] = Field(
        default="inject",
        alias="injectPrefix",
        description="Prefix of methods receiving one dependency each; False disables",
    )
    inject_method: Union[Literal[False], str] = Field(
        default="inject",
        alias="injectMethod",
        description="Hook method called after construction; 'constructor' injects __init__; False disables",
    )
    only_default_param: bool = Field(
        default=False,
        alias="onlyDefaultParam",
        description="Require every injected parameter to carry an explicit binding",
    )
    name: Optional[str] = Field(
        default=None,
        description="Diagnostic label of the registry",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        strict=True,
    )

    @field_validator("inject_prefix", "inject_method")
    @classmethod
    def validate_method_name(cls, v: Union[bool, str]) -> Union[bool, str]:
        """Reject empty method names; ``False`` passes through."""
        if v is not False and not v:
            raise ValueError("must be a non-empty string or False")
        return v

    @property
    def constructor_injection(self) -> bool:
        return self.inject_method == CONSTRUCTOR


def make_options(
    options: Union[RegistryOptions, Mapping[str, Any], None] = None, **overrides: Any
) -> RegistryOptions:
    """Build validated options from any of the accepted forms.

    Args:
        options: Existing options, a mapping of option values, or None for defaults.
        **overrides: Option values taking precedence over ``options``.

    Raises:
        ConfigurationError: If the options are not a mapping or fail validation.
    """
    if isinstance(options, RegistryOptions):
        if not overrides:
            return options
        options = options.model_dump()
    elif options is None:
        options = {}
    elif not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Registry options must be a mapping or RegistryOptions, got: {options!r}"
        )

    try:
        return RegistryOptions.model_validate({**options, **overrides})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid registry options: {e}") from e
