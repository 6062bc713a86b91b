"""Tests for HMAC signing and verification."""

import pytest

from tozny_auth.signer import check_signature, sign


def test_signs_reference_envelope(vectors):
    assert sign(vectors.secret, vectors.encoded) == vectors.signature


def test_bytes_and_str_messages_sign_alike(vectors):
    assert sign(vectors.secret, vectors.encoded.encode("ascii")) == vectors.signature


def test_verifies_reference_signature(vectors):
    assert check_signature(vectors.secret, vectors.signature, vectors.encoded)


def test_rejects_signature_under_other_secret(vectors):
    assert not check_signature(vectors.secret[::-1], vectors.signature, vectors.encoded)


def test_hex_decoded_secret_is_a_different_key(vectors):
    key = bytes.fromhex(vectors.secret)
    signature = sign(key, vectors.encoded)
    assert signature != vectors.signature
    assert check_signature(key, signature, vectors.encoded)
    assert not check_signature(vectors.secret, signature, vectors.encoded)


@pytest.mark.parametrize("message", ["", "x", "eyJhIjoiYiJ9", "ünïcode"])
def test_sign_then_check(message):
    secret = b"\x01" * 32
    assert check_signature(secret, sign(secret, message), message)
    assert not check_signature(b"\x02" * 32, sign(secret, message), message)


@pytest.mark.parametrize("signature", ["", "garbage", "HB8PQnwlqsB6JlU9NFoDAS_NwUzEtY7EYcgVyZfjsH5", "é"])
def test_rejects_wrong_signatures(vectors, signature):
    assert not check_signature(vectors.secret, signature, vectors.encoded)
