import logging
import secrets
from collections.abc import Callable

from uriuniq.errors import (
    BadReadsExceededError,
    CharsetSizeError,
    EntropySourceError,
)
from uriuniq.models import DEFAULT_BUFFER_SIZE

logger = logging.getLogger(__name__)

# Called with the requested byte count; may return fewer bytes.
EntropySource = Callable[[int], bytes]

MIN_CHARSET_SIZE = 2
MAX_CHARSET_SIZE = 256


def max_acceptable_byte(charset_size: int) -> int:
    """Largest byte value that maps onto ``charset_size`` without bias.

    Accepting only bytes ``<= 255 - (256 % charset_size)`` keeps the number
    of accepted values a multiple of ``charset_size``, so ``byte % size``
    hits every index equally often.
    """
    if charset_size < MIN_CHARSET_SIZE or charset_size > MAX_CHARSET_SIZE:
        raise CharsetSizeError(charset_size)
    return 255 - (256 % charset_size)


def _read_entropy(entropy: EntropySource, size: int) -> bytes:
    try:
        data = entropy(size)
    except OSError as err:
        logger.debug("entropy source failed reading %d bytes: %s", size, err)
        raise EntropySourceError(
            f"uriuniq: entropy source failed: {err}"
        ) from err
    return data[:size]


def sample_string(
    length: int,
    charset: str,
    max_bad_reads: int,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    entropy: EntropySource | None = None,
) -> str:
    """Draw ``length`` characters from ``charset`` by rejection sampling.

    Each call to ``entropy`` counts as one read against ``max_bad_reads``.
    Raises BadReadsExceededError when the budget is spent before ``length``
    characters are accepted. Source failures are not retried.
    """
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    if length == 0:
        return ""

    charset_size = len(charset)
    max_byte = max_acceptable_byte(charset_size)
    if max_bad_reads < 1:
        raise ValueError(f"max_bad_reads must be >= 1, got {max_bad_reads}")
    if buffer_size < 1:
        raise ValueError(f"buffer_size must be >= 1, got {buffer_size}")
    if entropy is None:
        entropy = secrets.token_bytes

    output: list[str] = []
    reads = 0
    while len(output) < length:
        if reads >= max_bad_reads:
            logger.debug(
                "read budget exhausted: %d reads, %d of %d characters",
                reads,
                len(output),
                length,
            )
            raise BadReadsExceededError(max_bad_reads, len(output), length)

        buffer = _read_entropy(entropy, buffer_size)
        reads += 1
        for byte_val in buffer:
            if byte_val > max_byte:
                continue
            output.append(charset[byte_val % charset_size])
            if len(output) == length:
                break

    return "".join(output)
