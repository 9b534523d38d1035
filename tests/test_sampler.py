from collections import Counter

import pytest
from helpers import (
    RecordingEntropy,
    constant_entropy,
    failing_entropy,
    scripted_entropy,
)

from uriuniq.errors import (
    BadReadsExceededError,
    CharsetSizeError,
    EntropySourceError,
)
from uriuniq.sampler import max_acceptable_byte, sample_string

_ALL_BYTES = bytes(range(256))


class TestMaxAcceptableByte:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (2, 255),
            (3, 254),
            (10, 249),
            (16, 255),
            (62, 247),
            (129, 128),
            (255, 254),
            (256, 255),
        ],
    )
    def test_bound(self, size: int, expected: int) -> None:
        assert max_acceptable_byte(size) == expected

    @pytest.mark.parametrize("size", [0, 1, 257, 1000])
    def test_rejects_out_of_bounds_size(self, size: int) -> None:
        with pytest.raises(CharsetSizeError, match="out of bounds") as exc:
            max_acceptable_byte(size)
        assert exc.value.size == size

    @pytest.mark.parametrize("size", [2, 3, 7, 10, 26, 36, 62, 71, 129, 200])
    def test_accepted_range_is_multiple_of_size(self, size: int) -> None:
        accepted = max_acceptable_byte(size) + 1
        assert accepted % size == 0
        assert 256 - accepted < size


class TestSampleString:
    def test_zero_length_reads_nothing(self) -> None:
        entropy = RecordingEntropy()
        assert sample_string(0, "abc", 10, entropy=entropy) == ""
        assert entropy.calls == []

    def test_zero_length_skips_charset_check(self) -> None:
        assert sample_string(0, "a", 10) == ""

    def test_negative_length_raises(self) -> None:
        with pytest.raises(ValueError, match="length must be >= 0"):
            sample_string(-1, "abc", 10)

    @pytest.mark.parametrize("charset", ["a", "x" * 257])
    def test_charset_size_checked_before_reading(self, charset: str) -> None:
        entropy = RecordingEntropy()
        with pytest.raises(CharsetSizeError):
            sample_string(10, charset, 10, entropy=entropy)
        assert entropy.calls == []

    def test_empty_charset_is_size_error(self) -> None:
        with pytest.raises(CharsetSizeError) as exc:
            sample_string(5, "", 10)
        assert exc.value.size == 0

    def test_min_and_max_charset_sizes_succeed(self) -> None:
        smallest = sample_string(10, "ab", 10)
        assert len(smallest) == 10
        assert set(smallest) <= {"a", "b"}

        widest_charset = "".join(chr(0x100 + i) for i in range(256))
        widest = sample_string(10, widest_charset, 10)
        assert len(widest) == 10
        assert set(widest) <= set(widest_charset)

    def test_rejects_non_positive_budget(self) -> None:
        with pytest.raises(ValueError, match="max_bad_reads must be >= 1"):
            sample_string(5, "abc", 0)

    def test_rejects_non_positive_buffer_size(self) -> None:
        with pytest.raises(ValueError, match="buffer_size must be >= 1"):
            sample_string(5, "abc", 10, buffer_size=0)

    def test_maps_bytes_modulo_charset_size(self) -> None:
        entropy = scripted_entropy([bytes([0, 1, 2, 3, 4, 5, 7])])
        assert sample_string(7, "abcd", 1, entropy=entropy) == "abcdabd"

    def test_discards_bytes_above_bound(self) -> None:
        # size 3 accepts 0..254, so 255 is dropped.
        entropy = scripted_entropy([bytes([255, 1, 255, 5])])
        assert sample_string(2, "abc", 1, entropy=entropy) == "bc"

    def test_each_accepted_byte_value_maps_evenly(self) -> None:
        for charset in ("abc", "abcdefg", "0123456789"):
            entropy = scripted_entropy([_ALL_BYTES])
            accepted = max_acceptable_byte(len(charset)) + 1
            value = sample_string(accepted, charset, 1, entropy=entropy)
            counts = Counter(value)
            assert set(counts) == set(charset)
            assert len(set(counts.values())) == 1

    def test_requests_buffer_size_bytes(self) -> None:
        entropy = RecordingEntropy()
        sample_string(10, "abc", 5, buffer_size=64, entropy=entropy)
        assert entropy.calls == [64]

    def test_spans_multiple_reads(self) -> None:
        entropy = constant_entropy(0)
        value = sample_string(10, "ab", 3, buffer_size=4, entropy=entropy)
        assert value == "a" * 10
        assert entropy.calls == [4, 4, 4]

    def test_ignores_bytes_beyond_buffer_size(self) -> None:
        entropy = scripted_entropy([bytes([1]) * 8, bytes([0]) * 8])
        value = sample_string(6, "ab", 2, buffer_size=4, entropy=entropy)
        assert value == "bbbbaa"

    def test_accepts_short_reads(self) -> None:
        entropy = scripted_entropy([b"\x00", b"", b"\x01"])
        assert sample_string(2, "ab", 3, entropy=entropy) == "ab"

    def test_short_reads_count_against_budget(self) -> None:
        entropy = scripted_entropy([b"\x00", b"", b"\x01"])
        with pytest.raises(BadReadsExceededError):
            sample_string(2, "ab", 2, entropy=entropy)

    def test_budget_exhausted_when_every_byte_rejected(self) -> None:
        entropy = constant_entropy(255)
        with pytest.raises(
            BadReadsExceededError, match="too many bad reads"
        ) as exc:
            sample_string(5, "abc", 4, entropy=entropy)
        assert len(entropy.calls) == 4
        assert exc.value.max_bad_reads == 4
        assert exc.value.produced == 0
        assert exc.value.length == 5

    def test_budget_reports_partial_progress(self) -> None:
        entropy = scripted_entropy([bytes([0, 255]), bytes([255, 255])])
        with pytest.raises(BadReadsExceededError) as exc:
            sample_string(3, "abc", 2, entropy=entropy)
        assert exc.value.produced == 1

    def test_zero_rejection_charset_never_exhausts_budget(self) -> None:
        for byte_value in (0, 127, 128, 255):
            entropy = constant_entropy(byte_value)
            value = sample_string(10, "ab", 1, entropy=entropy)
            assert len(value) == 10
            assert entropy.calls == [2048]

    def test_entropy_failure_is_wrapped_and_not_retried(self) -> None:
        entropy = failing_entropy("pool gone")
        with pytest.raises(EntropySourceError, match="pool gone") as exc:
            sample_string(5, "abc", 10, entropy=entropy)
        assert isinstance(exc.value.__cause__, OSError)
        assert entropy.calls == [2048]

    def test_entropy_failure_is_an_os_error(self) -> None:
        with pytest.raises(OSError):
            sample_string(5, "abc", 10, entropy=failing_entropy())

    def test_default_entropy_source(self) -> None:
        value = sample_string(256, "abcdefghij", 150)
        assert len(value) == 256
        assert set(value) <= set("abcdefghij")


@pytest.mark.slow
def test_two_char_alphabet_frequencies_are_balanced() -> None:
    n = 100_000
    counts = Counter(sample_string(n, "ab", 150))
    expected = n / 2
    chi_square = sum(
        (counts[c] - expected) ** 2 / expected for c in "ab"
    )
    # 1 degree of freedom, p = 0.001
    assert chi_square < 10.828


@pytest.mark.slow
def test_odd_alphabet_frequencies_are_balanced() -> None:
    charset = "abcdefg"
    n = 140_000
    counts = Counter(sample_string(n, charset, 500))
    expected = n / len(charset)
    chi_square = sum(
        (counts[c] - expected) ** 2 / expected for c in charset
    )
    # 6 degrees of freedom, p = 0.001
    assert chi_square < 22.458
