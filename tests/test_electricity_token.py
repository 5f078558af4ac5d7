"""
Tests for 20-digit electricity token generation and verification.
"""

import hashlib
import hmac
import re
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest

from electricity.token import (
    TID_EPOCH,
    TokenGenerationError,
    build_token_data,
    compute_tid,
    format_token,
    format_units,
    generate_token,
    signature_to_digits,
    verify_token,
)

KEY = "REG_SECRET_KEY"
METER = "12345678901"
TID = 1_000_000_000
TOKEN_RE = re.compile(r"^\d{5}-\d{5}-\d{5}-\d{5}$")


class TestTid:
    def test_epoch_is_1993_utc(self):
        assert TID_EPOCH == int(datetime(1993, 1, 1, tzinfo=timezone.utc).timestamp())

    def test_compute_tid_floors_seconds(self):
        assert compute_tid(now=TID_EPOCH + 42.9) == 42

    def test_compute_tid_uses_clock(self):
        with patch("electricity.token.time.time", return_value=TID_EPOCH + 7.5):
            assert compute_tid() == 7


class TestFormatting:
    @pytest.mark.parametrize(
        "units, expected",
        [
            (100, "100.00"),
            (100.0, "100.00"),
            (Decimal("100.00"), "100.00"),
            (100.005, "100.01"),
            (2.675, "2.68"),
            (0.004, "0.00"),
            (1234.5, "1234.50"),
            (1e30, "1" + "0" * 30 + ".00"),
            (Decimal("123456789012345678901234567890.125"), "123456789012345678901234567890.13"),
        ],
    )
    def test_format_units_half_up(self, units, expected):
        assert format_units(units) == expected

    def test_token_data_layout(self):
        assert build_token_data(METER, 5, 100.0) == f"{METER}|5|100.00"

    def test_digits_are_char_codes_mod_10(self):
        # '0' = 48, 'a' = 97, 'f' = 102
        assert signature_to_digits("0af" + "0" * 17) == "872" + "8" * 17

    def test_short_signature_is_zero_padded(self):
        assert signature_to_digits("a") == "7" + "0" * 19

    def test_format_token_groups(self):
        assert format_token("01234567890123456789") == "01234-56789-01234-56789"

    def test_format_token_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            format_token("123")


class TestGenerate:
    def test_matches_independent_computation(self):
        sig = hmac.new(KEY.encode(), f"{METER}|{TID}|100.00".encode(), hashlib.sha256).hexdigest()
        digits = "".join(str(ord(c) % 10) for c in sig[:20])
        expected = "-".join(digits[i:i + 5] for i in range(0, 20, 5))
        assert generate_token(METER, 100.0, secret=KEY, tid=TID) == expected

    def test_format(self):
        assert TOKEN_RE.match(generate_token(METER, 42.5, secret=KEY, tid=TID))

    def test_equivalent_units_give_same_token(self):
        a = generate_token(METER, 100.0, secret=KEY, tid=TID)
        b = generate_token(METER, 100, secret=KEY, tid=TID)
        c = generate_token(METER, Decimal("100.00"), secret=KEY, tid=TID)
        assert a == b == c

    def test_same_instant_same_token(self):
        with patch("electricity.token.time.time", return_value=TID_EPOCH + TID):
            assert generate_token(METER, 100.0, secret=KEY) == generate_token(METER, 100.00, secret=KEY)

    def test_secret_matters(self):
        assert generate_token(METER, 10, secret=KEY, tid=TID) != generate_token(
            METER, 10, secret="other", tid=TID
        )

    def test_invalid_units_raise(self):
        with pytest.raises(TokenGenerationError):
            generate_token(METER, float("nan"), secret=KEY, tid=TID)
        with pytest.raises(TokenGenerationError):
            generate_token(METER, "lots", secret=KEY, tid=TID)


class TestVerify:
    @pytest.mark.parametrize(
        "meter, units, tid",
        [
            (METER, 100.0, TID),
            ("000001", 0.01, 0),
            ("987654", 99999.99, 2**31),
            ("123456", 1e30, 1),
            ("123456", -1e300, 1),
        ],
    )
    def test_round_trip(self, meter, units, tid):
        token = generate_token(meter, units, secret=KEY, tid=tid)
        assert verify_token(token, meter, units, tid, secret=KEY)

    def test_hyphens_optional(self):
        token = generate_token(METER, 100.0, secret=KEY, tid=TID)
        assert verify_token(token.replace("-", ""), METER, 100.0, TID, secret=KEY)

    def test_single_digit_mutations_rejected(self):
        token = generate_token(METER, 100.0, secret=KEY, tid=TID)
        for i, ch in enumerate(token):
            if ch == "-":
                continue
            mutated = token[:i] + str((int(ch) + 1) % 10) + token[i + 1:]
            assert not verify_token(mutated, METER, 100.0, TID, secret=KEY)

    def test_wrong_inputs_rejected(self):
        token = generate_token(METER, 100.0, secret=KEY, tid=TID)
        assert not verify_token(token, METER, 100.0, TID + 1, secret=KEY)
        assert not verify_token(token, METER, 100.01, TID, secret=KEY)
        assert not verify_token(token, "12345678902", 100.0, TID, secret=KEY)
        assert not verify_token(token, METER, 100.0, TID, secret="other")

    def test_malformed_input_returns_false(self):
        assert not verify_token(None, METER, 100.0, TID, secret=KEY)
        assert not verify_token("00000-00000-00000-00000", METER, float("nan"), TID, secret=KEY)
        assert not verify_token("00000-00000-00000-00000", METER, 100.0, None, secret=KEY)
