"""Named charset presets.

Each preset is a set of ``GenerateOptions`` overrides selecting a common
alphabet, so callers do not have to spell out exclusion flags or custom
charsets for the usual cases.
"""

from dataclasses import dataclass
from typing import Any

from uriuniq.charsets import LOWERCASE, NUMERIC, UPPERCASE, URI_SAFE
from uriuniq.models import GenerateOptions


@dataclass
class CharsetPreset:
    """A single named options configuration."""

    name: str
    description: str
    options_overrides: dict[str, Any]


# =============================================================================
# Flag-based presets
# =============================================================================

_FLAG_PRESETS: list[CharsetPreset] = [
    CharsetPreset(
        "alphanumeric",
        "digits, lowercase and uppercase letters (62 chars)",
        {},
    ),
    CharsetPreset(
        "numeric",
        "digits only (10 chars)",
        {"exclude_lowercase": True, "exclude_uppercase": True},
    ),
    CharsetPreset(
        "lowercase",
        "lowercase letters only (26 chars)",
        {"exclude_numeric": True, "exclude_uppercase": True},
    ),
    CharsetPreset(
        "uppercase",
        "uppercase letters only (26 chars)",
        {"exclude_numeric": True, "exclude_lowercase": True},
    ),
    CharsetPreset(
        "lower-alnum",
        "digits and lowercase letters (36 chars)",
        {"exclude_uppercase": True},
    ),
    CharsetPreset(
        "upper-alnum",
        "digits and uppercase letters (36 chars)",
        {"exclude_lowercase": True},
    ),
]

# =============================================================================
# Custom-charset presets
# 16 and 64 divide 256, so these never reject a byte.
# =============================================================================

_CUSTOM_PRESETS: list[CharsetPreset] = [
    CharsetPreset(
        "hex",
        "lowercase hexadecimal digits (16 chars)",
        {"custom_charset": NUMERIC + "abcdef"},
    ),
    CharsetPreset(
        "base64url",
        "RFC 4648 URL-safe base64 alphabet (64 chars)",
        {"custom_charset": UPPERCASE + LOWERCASE + NUMERIC + "-_"},
    ),
    CharsetPreset(
        "uri-safe",
        "every URI-safe character, punctuation included (71 chars)",
        {"custom_charset": URI_SAFE},
    ),
]

# =============================================================================
# Lookup Functions
# =============================================================================

_PRESETS: dict[str, CharsetPreset] = {
    preset.name: preset for preset in (*_FLAG_PRESETS, *_CUSTOM_PRESETS)
}


def get_preset_names() -> list[str]:
    """Return preset names in definition order."""
    return list(_PRESETS)


def get_preset(name: str) -> CharsetPreset:
    preset = _PRESETS.get(name)
    if preset is None:
        raise ValueError(
            f"Unknown preset: {name}. Valid: {get_preset_names()}"
        )
    return preset


def get_preset_options(name: str, **overrides: Any) -> GenerateOptions:
    """Build options for a preset.

    Args:
        name: Preset name, e.g. "hex" or "lower-alnum".
        **overrides: Extra option fields (length, max_bad_reads, ...).
            Charset-selecting fields here replace the preset's own.

    Raises:
        ValueError: If the preset name is unknown.
        pydantic.ValidationError: If the merged options are invalid.
    """
    preset = get_preset(name)
    return GenerateOptions(**{**preset.options_overrides, **overrides})
