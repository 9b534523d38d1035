"""Charset resolution: configuration flags or a custom set -> alphabet."""

import logging

from uriuniq.errors import EmptyCharsetError, UnsafeCharsetError
from uriuniq.models import (
    Advisory,
    AdvisoryCode,
    GenerateOptions,
    UriSafetyPolicy,
    add_advisory,
)

logger = logging.getLogger(__name__)

NUMERIC = "0123456789"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHANUMERIC = LOWERCASE + UPPERCASE + NUMERIC
URI_SAFE = UPPERCASE + LOWERCASE + NUMERIC + "-_.~!*'()"

_URI_SAFE_SET = frozenset(URI_SAFE)


def non_uri_safe_chars(text: str) -> list[str]:
    """Return the distinct characters of ``text`` outside the URI-safe set.

    Order follows first appearance in ``text``.
    """
    return [c for c in dict.fromkeys(text) if c not in _URI_SAFE_SET]


def is_uri_safe(text: str) -> bool:
    return all(c in _URI_SAFE_SET for c in text)


def _check_custom_charset(
    charset: str,
    policy: UriSafetyPolicy,
    advisories: list[Advisory] | None,
) -> None:
    unsafe = non_uri_safe_chars(charset)
    if not unsafe:
        return
    if policy == UriSafetyPolicy.REJECT:
        raise UnsafeCharsetError(unsafe)

    logger.warning(
        "custom charset %r contains characters that are not URI-safe: %r",
        charset,
        "".join(unsafe),
    )
    add_advisory(
        advisories,
        AdvisoryCode.NON_URI_SAFE_CHARSET,
        f"Custom charset '{charset}' contains characters that are not "
        f"URI-safe: {''.join(unsafe)!r}",
        unsafe,
    )


def resolve_charset(
    options: GenerateOptions,
    advisories: list[Advisory] | None = None,
) -> str:
    """Return the ordered alphabet that ``options`` selects.

    A non-empty custom charset wins and is returned verbatim, duplicates
    included. Otherwise the numeric, lowercase and uppercase subsets are
    concatenated in that order, skipping excluded ones; excluding all three
    falls back to the full alphanumeric set.
    """
    if options.custom_charset:
        _check_custom_charset(
            options.custom_charset, options.uri_safety, advisories
        )
        return options.custom_charset

    parts: list[str] = []
    if not options.exclude_numeric:
        parts.append(NUMERIC)
    if not options.exclude_lowercase:
        parts.append(LOWERCASE)
    if not options.exclude_uppercase:
        parts.append(UPPERCASE)
    if options.excludes_everything:
        parts.append(ALPHANUMERIC)

    charset = "".join(parts)
    if not charset:
        raise EmptyCharsetError()
    return charset
