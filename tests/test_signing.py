"""
Tests for signing.py - canonical strings and HMAC signatures.

These are pure functions, so they're easy to test and provide high value.
"""

import re

import pytest

from weatherlink.signing import (
    KEY_PARAM,
    SIGNATURE_PARAM,
    TIMESTAMP_PARAM,
    canonicalize,
    make_signature_params,
    sign,
    signature,
)

REFERENCE_SIGNATURE = "e576785c250d8c8db2e5fc2b7857b4c39ee56958107b978137e10d0fa6c1bc7b"

# ============================================================================
# Tests for make_signature_params()
# ============================================================================


class TestMakeSignatureParams:
    """Tests for the per-request parameter set."""

    def test_contains_key_and_timestamp(self, frozen_time):
        """Test that key and current Unix time are included."""
        params = make_signature_params("mykey")

        assert params == {KEY_PARAM: "mykey", TIMESTAMP_PARAM: str(frozen_time)}

    def test_explicit_timestamp(self):
        """Test that an explicit timestamp overrides the clock."""
        params = make_signature_params("mykey", timestamp=123)

        assert params[TIMESTAMP_PARAM] == "123"

    def test_returns_new_dict_each_call(self):
        """Test that parameter sets are never shared between calls."""
        first = make_signature_params("mykey", timestamp=1)
        second = make_signature_params("mykey", timestamp=1)

        first["station-id"] = "2970"

        assert first is not second
        assert "station-id" not in second


# ============================================================================
# Tests for canonicalize()
# ============================================================================


class TestCanonicalize:
    """Tests for the canonical signing string."""

    def test_reference_vector(self):
        """Test the reference key/value concatenation."""
        params = {"api-key": "mykey", "foo": "bar", "t": "123"}

        assert canonicalize(params) == "api-keymykeyfoobart123"

    def test_independent_of_insertion_order(self):
        """Test that insertion order does not change the result."""
        forward = {"api-key": "mykey", "foo": "bar", "t": "123"}
        backward = {"t": "123", "foo": "bar", "api-key": "mykey"}

        assert canonicalize(forward) == canonicalize(backward)

    def test_empty_mapping(self):
        """Test that an empty mapping gives an empty string."""
        assert canonicalize({}) == ""

    def test_sorts_on_names_not_pairs(self):
        """Test that ordering uses names only, not name+value."""
        # "a" + "z" would sort after "ab" + "a" if pairs were compared
        params = {"ab": "a", "a": "z"}

        assert canonicalize(params) == "azaba"

    def test_bytewise_order(self):
        """Test that upper-case names sort before lower-case ones."""
        params = {"b": "1", "B": "2", "a": "3"}

        assert canonicalize(params) == "B2a3b1"

    def test_integer_values_are_plain_decimal(self):
        """Test that integer values are rendered without padding."""
        assert canonicalize({"t": 7, "station-id": 2970}) == "station-id2970t7"

    def test_skips_signature_entry(self):
        """Test that an api-signature entry is not part of the string."""
        params = {"api-key": "mykey", "foo": "bar", "t": "123"}
        signed = dict(params, **{"api-signature": "deadbeef"})

        assert canonicalize(signed) == canonicalize(params) == "api-keymykeyfoobart123"


# ============================================================================
# Tests for sign() and signature()
# ============================================================================


class TestSign:
    """Tests for the HMAC-SHA256 signer."""

    def test_reference_vector(self):
        """Test the signature matches the server's reference value."""
        assert sign("mysecret", "api-keymykeyfoobart123") == REFERENCE_SIGNATURE

    def test_lower_case_hex_of_64_chars(self):
        """Test the output format."""
        result = sign("mysecret", "anything")

        assert re.fullmatch(r"[0-9a-f]{64}", result)

    def test_deterministic(self):
        """Test that the same inputs always give the same output."""
        assert sign("s", "message") == sign("s", "message")

    def test_sensitive_to_secret(self):
        """Test that changing the secret changes the signature."""
        assert sign("mysecret", "message") != sign("othersecret", "message")

    @pytest.mark.parametrize(
        "changed",
        [
            {"api-key": "otherkey"},
            {"foo": "baz"},
            {"t": "124"},
            {"extra": ""},
        ],
    )
    def test_signature_sensitive_to_params(self, changed):
        """Test that changing any parameter changes the signature."""
        params = {"api-key": "mykey", "foo": "bar", "t": "123"}

        assert signature({**params, **changed}, "mysecret") != REFERENCE_SIGNATURE

    def test_signature_ignores_existing_signature_entry(self):
        """Test that a stale api-signature value is not signed."""
        params = {
            "api-key": "mykey",
            "foo": "bar",
            "t": "123",
            SIGNATURE_PARAM: "stale",
        }

        assert signature(params, "mysecret") == REFERENCE_SIGNATURE
