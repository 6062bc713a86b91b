"""Tests for signed request envelope construction."""

import json
import re
import time

import pytest

from tozny_auth.codec import decode_urlsafe_base64
from tozny_auth.envelope import build_envelope, make_envelope
from tozny_auth.errors import EnvelopeError, ReservedParamError
from tozny_auth.signer import check_signature


def _decode(pair) -> dict:
    return json.loads(decode_urlsafe_base64(pair.signed_data))


def test_login_challenge_envelope_has_only_reserved_keys(vectors):
    pair = build_envelope(vectors.realm_key_id, vectors.secret, "user.login_challenge")
    payload = _decode(pair)
    assert list(payload) == ["nonce", "expires_at", "realm_key_id", "method"]
    assert payload["realm_key_id"] == vectors.realm_key_id
    assert payload["method"] == "user.login_challenge"


def test_envelope_is_signed_over_encoded_text(vectors):
    pair = build_envelope(vectors.realm_key_id, vectors.secret, "realm.user_get", {"user_id": "sid_1234"})
    assert check_signature(vectors.secret, pair.signature, pair.signed_data)


def test_expiration_time_is_ten_digit_string(vectors):
    secret = bytes.fromhex(vectors.secret)
    pair = build_envelope(vectors.realm_key_id, secret, "realm.user_get", {"user_id": "sid_1234"})
    payload = _decode(pair)
    assert isinstance(payload["expires_at"], str)
    assert re.fullmatch(r"\d{10}", payload["expires_at"])


def test_expiry_defaults_to_five_minutes(vectors):
    pair = build_envelope(
        vectors.realm_key_id, vectors.secret, "realm.user_get", clock=lambda: 1414541672.9
    )
    assert _decode(pair)["expires_at"] == "1414541972"


def test_explicit_expiry_is_used_verbatim(vectors):
    pair = build_envelope(vectors.realm_key_id, vectors.secret, "realm.check_valid_login", expires_at=1500000000)
    assert _decode(pair)["expires_at"] == "1500000000"


def test_canonical_serialization_is_compact_and_ordered(vectors):
    pair = build_envelope(
        vectors.realm_key_id,
        vectors.secret,
        "realm.user_get",
        {"user_id": "sid_1234", "extra": "x"},
        clock=lambda: 1414541672,
        nonce_factory=lambda n: vectors.nonce,
    )
    assert decode_urlsafe_base64(pair.signed_data).decode("utf-8") == (
        '{"nonce":"6b49eac58dd5e8d9aab6a5eab919fc47863cb233cc560c9b60772685e321ff50",'
        '"expires_at":"1414541972","realm_key_id":"sid_d915e7226947b",'
        '"method":"realm.user_get","user_id":"sid_1234","extra":"x"}'
    )


def test_nonce_is_64_hex_chars(vectors):
    envelope = make_envelope(vectors.realm_key_id, "realm.user_get")
    assert re.fullmatch(r"[0-9a-f]{64}", envelope.nonce)


def test_nonces_are_unique(vectors):
    nonces = {
        make_envelope(vectors.realm_key_id, "realm.user_get").nonce for _ in range(10_000)
    }
    assert len(nonces) == 10_000


@pytest.mark.parametrize("key", ["nonce", "expires_at", "realm_key_id", "method"])
def test_reserved_param_is_rejected(vectors, key):
    with pytest.raises(ReservedParamError) as excinfo:
        build_envelope(vectors.realm_key_id, vectors.secret, "realm.user_get", {key: "x"})
    assert excinfo.value.keys == [key]


def test_reserved_param_error_is_envelope_error(vectors):
    with pytest.raises(EnvelopeError):
        make_envelope(vectors.realm_key_id, "realm.user_get", {"method": "other"})


def test_random_source_failure_raises_envelope_error(vectors):
    def broken(n):
        raise OSError("no entropy")

    with pytest.raises(EnvelopeError) as excinfo:
        build_envelope(vectors.realm_key_id, vectors.secret, "realm.user_get", nonce_factory=broken)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_envelope_params_property(vectors):
    envelope = make_envelope(vectors.realm_key_id, "realm.user_get", {"user_id": "sid_1234"})
    assert envelope.params == {"user_id": "sid_1234"}
    assert int(envelope.expires_at) > time.time()
