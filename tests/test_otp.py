"""Tests for one-time pairing codes."""

import random

import pytest

from stockerbot.pairing.otp import OTP_MAX, OTP_MIN, generate_otp, looks_like_code


class TestGenerateOtp:
    def test_four_digits_in_range(self):
        for _ in range(200):
            code = generate_otp()
            assert len(code) == 4
            assert code.isdigit()
            assert OTP_MIN <= int(code) <= OTP_MAX

    def test_seeded_rng_is_reproducible(self):
        assert generate_otp(random.Random(7)) == generate_otp(random.Random(7))

    def test_never_leading_zero(self):
        codes = {generate_otp(random.Random(seed)) for seed in range(100)}
        assert all(not c.startswith("0") for c in codes)


class TestLooksLikeCode:
    @pytest.mark.parametrize("text", ["0000", "1234", "9999"])
    def test_four_digits(self, text: str):
        assert looks_like_code(text)

    @pytest.mark.parametrize("text", ["", "123", "12345", "12a4", " 1234", "1234\n", "١٢٣٤"])
    def test_other_shapes(self, text: str):
        assert not looks_like_code(text)
