"""uriuniq: unbiased random URI-safe strings from a configurable charset."""

import logging

from uriuniq.charsets import is_uri_safe, resolve_charset
from uriuniq.errors import (
    BadReadsExceededError,
    CharsetError,
    CharsetSizeError,
    EmptyCharsetError,
    EntropySourceError,
    UnsafeCharsetError,
    UriuniqError,
)
from uriuniq.generator import generate, generate_string
from uriuniq.models import (
    Advisory,
    AdvisoryCode,
    GenerateOptions,
    GenerationResult,
    GeneratorDefaults,
    UriSafetyPolicy,
)
from uriuniq.presets import get_preset_names, get_preset_options
from uriuniq.sampler import EntropySource, sample_string

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Advisory",
    "AdvisoryCode",
    "BadReadsExceededError",
    "CharsetError",
    "CharsetSizeError",
    "EmptyCharsetError",
    "EntropySource",
    "EntropySourceError",
    "GenerateOptions",
    "GenerationResult",
    "GeneratorDefaults",
    "UnsafeCharsetError",
    "UriSafetyPolicy",
    "UriuniqError",
    "generate",
    "generate_string",
    "get_preset_names",
    "get_preset_options",
    "is_uri_safe",
    "resolve_charset",
    "sample_string",
]
