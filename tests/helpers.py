import secrets
from collections.abc import Callable, Sequence


class RecordingEntropy:
    """Entropy source that records every requested size.

    Delegates to ``source`` for the bytes, so tests can assert on how many
    reads a call made without giving up real randomness.
    """

    def __init__(
        self, source: Callable[[int], bytes] = secrets.token_bytes
    ) -> None:
        self.source = source
        self.calls: list[int] = []

    def __call__(self, size: int) -> bytes:
        self.calls.append(size)
        return self.source(size)


def constant_entropy(byte_value: int) -> RecordingEntropy:
    return RecordingEntropy(lambda size: bytes([byte_value]) * size)


def scripted_entropy(chunks: Sequence[bytes]) -> RecordingEntropy:
    """Return each chunk in turn, ignoring the requested size."""
    remaining = list(chunks)

    def _next_chunk(size: int) -> bytes:
        if not remaining:
            raise AssertionError("scripted entropy ran out of chunks")
        return remaining.pop(0)

    return RecordingEntropy(_next_chunk)


def failing_entropy(
    message: str = "entropy pool unavailable",
) -> RecordingEntropy:
    def _fail(size: int) -> bytes:
        raise OSError(message)

    return RecordingEntropy(_fail)
