class UriuniqError(Exception):
    """Base class for all uriuniq errors."""


class CharsetError(UriuniqError, ValueError):
    """Raised when the configured charset cannot be sampled from."""


class EmptyCharsetError(CharsetError):
    """Raised when charset resolution produces no characters."""

    def __init__(self) -> None:
        super().__init__("uriuniq: no valid characters in charset")


class CharsetSizeError(CharsetError):
    """Raised when the charset size is outside [2, 256]."""

    def __init__(self, size: int) -> None:
        super().__init__(
            f"uriuniq: charset size out of bounds: got {size}, "
            "expected 2-256"
        )
        self.size = size


class UnsafeCharsetError(CharsetError):
    """Raised under the strict policy for non-URI-safe custom charsets."""

    def __init__(self, chars: list[str]) -> None:
        rendered = "".join(chars)
        super().__init__(
            f"uriuniq: custom charset contains characters that are not "
            f"URI-safe: {rendered!r}"
        )
        self.chars = chars


class BadReadsExceededError(UriuniqError, RuntimeError):
    """Raised when the entropy read budget runs out before the target length."""

    def __init__(self, max_bad_reads: int, produced: int, length: int) -> None:
        super().__init__(
            f"uriuniq: too many bad reads: produced {produced} of {length} "
            f"characters in {max_bad_reads} reads"
        )
        self.max_bad_reads = max_bad_reads
        self.produced = produced
        self.length = length


class EntropySourceError(UriuniqError, OSError):
    """Raised when the secure random source fails."""
