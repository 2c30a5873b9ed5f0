"""Tests for base-conversion password sampling."""

from collections import Counter

import pytest

from upgen.charset import compile_charset, parse_charset_spec
from upgen.entropy import OsEntropySource
from upgen.errors import EntropyError
from upgen.sampler import entropy_bytes_needed, sample_passwords


class TestEntropySizing:
    """How many random bytes a batch needs."""

    def test_default_charset_and_length(self):
        # 95**24 needs 158 bits -> 19 whole bytes + 1 spare
        assert entropy_bytes_needed(95, 24) == 20

    def test_exact_byte_boundary_still_gets_spare(self):
        # 256**1 - 1 fits in 8 bits
        assert entropy_bytes_needed(256, 1) == 2
        assert entropy_bytes_needed(2, 8) == 2

    def test_single_character_charset(self):
        assert entropy_bytes_needed(1, 50) == 1

    def test_grows_with_batch(self):
        assert entropy_bytes_needed(62, 100) > entropy_bytes_needed(62, 10)


class TestDigitExtraction:
    """Base conversion over known random bytes."""

    def test_little_endian_least_significant_digit_first(self, fixed_source):
        charset = parse_charset_spec("abc")
        # digits (base 3, least significant first): 1, 2, 0, 1
        value = 1 + 2 * 3 + 0 * 9 + 1 * 27
        src = fixed_source(value.to_bytes(1, "little"))
        assert sample_passwords(charset, 2, 2, src) == ["bc", "ab"]
        assert src.requests == [1]

    def test_multi_byte_value_is_little_endian(self, fixed_source):
        charset = list(range(0x30, 0x3A))  # "0".."9"
        src = fixed_source((4321).to_bytes(2, "little"))
        assert sample_passwords(charset, 4, 1, src) == ["1234"]

    def test_two_letter_edge_case(self, fixed_source):
        charset = parse_charset_spec("ab")
        assert sample_passwords(charset, 1, 1, fixed_source(b"\x01")) == ["b"]
        assert sample_passwords(charset, 1, 1, fixed_source(b"\x02")) == ["a"]

    def test_single_draw_per_batch(self, fixed_source):
        src = fixed_source()
        sample_passwords(compile_charset(None), 24, 5, src)
        assert src.requests == [entropy_bytes_needed(95, 120)]

    def test_short_read_is_an_error(self, fixed_source):
        with pytest.raises(EntropyError):
            sample_passwords(compile_charset(None), 8, 1, fixed_source(short=True))

    def test_rejects_zero_parameters(self):
        with pytest.raises(ValueError):
            sample_passwords(compile_charset(None), 0, 1)
        with pytest.raises(ValueError):
            sample_passwords(compile_charset(None), 1, 0)


class TestOutput:
    """Shape and alphabet of generated passwords."""

    def test_shape(self):
        passwords = sample_passwords(compile_charset(None), 17, 6)
        assert len(passwords) == 6
        assert all(len(p) == 17 for p in passwords)

    def test_alphabet_conformance(self):
        charset = parse_charset_spec("^a-zA-Z0-9")
        allowed = set(bytes(charset).decode("ascii"))
        for password in sample_passwords(charset, 64, 20):
            assert set(password) <= allowed

    def test_default_source_is_os(self, monkeypatch):
        calls = []
        real_read = OsEntropySource.read

        def spy(self, num_bytes):
            calls.append(num_bytes)
            return real_read(self, num_bytes)

        monkeypatch.setattr(OsEntropySource, "read", spy)
        sample_passwords(parse_charset_spec("ab"), 1, 1)
        assert calls == [1]

    def test_two_letter_charset_yields_one_letter(self):
        (password,) = sample_passwords(parse_charset_spec("ab"), 1, 1)
        assert password in ("a", "b")


class TestUniformity:
    """Empirical character frequencies."""

    def test_character_frequencies_are_flat(self):
        charset = parse_charset_spec("abcd")
        draws = 4000
        counts = Counter()
        for _ in range(draws):
            counts.update(sample_passwords(charset, 1, 1))

        expected = draws / len(charset)
        chi_square = sum((counts[c] - expected) ** 2 / expected for c in "abcd")
        # 3 degrees of freedom; 30 is far beyond the 1e-5 tail
        assert chi_square < 30
        assert set(counts) == set("abcd")

    def test_positions_within_batch_are_flat(self):
        charset = parse_charset_spec("01")
        passwords = sample_passwords(charset, 8, 500)
        ones = [sum(p[i] == "1" for p in passwords) for i in range(8)]
        for count in ones:
            assert 150 < count < 350
