from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_LENGTH = 16
DEFAULT_MAX_BAD_READS = 150
DEFAULT_BUFFER_SIZE = 2048


def _validate_no_bool_ints(data: Any, field_names: tuple[str, ...]) -> None:
    if not isinstance(data, dict):
        return

    for field_name in field_names:
        if isinstance(data.get(field_name), bool):
            raise ValueError(f"{field_name}: bool is not allowed, expected int")


class UriSafetyPolicy(str, Enum):
    WARN = "warn"
    REJECT = "reject"


class AdvisoryCode(str, Enum):
    DEFAULT_LENGTH_SUBSTITUTED = "default_length_substituted"
    DEFAULT_MAX_BAD_READS_SUBSTITUTED = "default_max_bad_reads_substituted"
    NON_URI_SAFE_CHARSET = "non_uri_safe_charset"


class Advisory(BaseModel):
    """Non-fatal notice raised while producing a value."""

    code: AdvisoryCode = Field(description="Machine-readable advisory kind")
    message: str = Field(description="Human-readable explanation")
    value: Any = Field(
        default=None, description="The offending input value (serializable)"
    )


def add_advisory(
    advisories: list[Advisory] | None,
    code: AdvisoryCode,
    message: str,
    value: Any = None,
) -> None:
    """Append an advisory when a collector list is given; no-op otherwise."""
    if advisories is None:
        return
    advisories.append(Advisory(code=code, message=message, value=value))


class GeneratorDefaults(BaseModel):
    """Values substituted when options leave a setting unset or invalid."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    max_bad_reads: int = Field(default=DEFAULT_MAX_BAD_READS, ge=1)
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, ge=1)

    @model_validator(mode="before")
    @classmethod
    def validate_input_defaults(cls, data: Any) -> Any:
        _validate_no_bool_ints(data, ("length", "max_bad_reads", "buffer_size"))
        return data


class GenerateOptions(BaseModel):
    """Caller configuration for a single generation call.

    ``length`` and ``max_bad_reads`` accept zero or negative values; those
    are replaced by the defaults at generation time and reported as
    advisories rather than rejected here.
    """

    model_config = ConfigDict(extra="forbid")

    length: int | None = None
    exclude_numeric: bool = False
    exclude_lowercase: bool = False
    exclude_uppercase: bool = False
    custom_charset: str = ""
    max_bad_reads: int | None = None
    uri_safety: UriSafetyPolicy = UriSafetyPolicy.WARN

    @model_validator(mode="before")
    @classmethod
    def validate_input_options(cls, data: Any) -> Any:
        _validate_no_bool_ints(data, ("length", "max_bad_reads"))
        return data

    @property
    def excludes_everything(self) -> bool:
        return (
            self.exclude_numeric
            and self.exclude_lowercase
            and self.exclude_uppercase
        )


class GenerationResult(BaseModel):
    value: str = Field(description="The generated identifier")
    charset: str = Field(description="Alphabet the value was sampled from")
    length: int = Field(description="Effective length after defaults")
    warnings: list[Advisory] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.value

    def has_warning(self, code: AdvisoryCode) -> bool:
        return any(advisory.code == code for advisory in self.warnings)
