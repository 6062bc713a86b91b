"""Shared fixtures for tozny_auth tests."""

import json
from types import SimpleNamespace
from typing import Callable, Mapping

import pytest

from tozny_auth.codec import decode_urlsafe_base64
from tozny_auth.transports import InMemoryTransport


@pytest.fixture
def vectors() -> SimpleNamespace:
    """Reference envelope, encoding and signature for the fixed test realm."""
    return SimpleNamespace(
        realm_key_id="sid_d915e7226947b",
        secret="8f8c9b8df39f8c8be4a39378bece4ac01cba948f9b4ef7b90acad3f49d5358f2",
        nonce="6b49eac58dd5e8d9aab6a5eab919fc47863cb233cc560c9b60772685e321ff50",
        expires_at="1414541972",
        data=(
            '{"nonce":"6b49eac58dd5e8d9aab6a5eab919fc47863cb233cc560c9b60772685e321ff50", '
            '"expires_at":"1414541972", "realm_key_id":"sid_d915e7226947b", '
            '"user_id":"sid_1234", "method":"realm.user_get"}'
        ),
        encoded=(
            "eyJub25jZSI6IjZiNDllYWM1OGRkNWU4ZDlhYWI2YTVlYWI5MTlmYzQ3ODYzY2IyMzNjYzU2MGM5"
            "YjYwNzcyNjg1ZTMyMWZmNTAiLCAiZXhwaXJlc19hdCI6IjE0MTQ1NDE5NzIiLCAicmVhbG1fa2V5"
            "X2lkIjoic2lkX2Q5MTVlNzIyNjk0N2IiLCAidXNlcl9pZCI6InNpZF8xMjM0IiwgIm1ldGhvZCI6"
            "InJlYWxtLnVzZXJfZ2V0In0"
        ),
        signature="HB8PQnwlqsB6JlU9NFoDAS_NwUzEtY7EYcgVyZfjsH4",
    )


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def decode_signed() -> Callable[[Mapping[str, str]], dict]:
    """Decode the envelope inside posted form fields without checking the signature."""

    def _decode(fields: Mapping[str, str]) -> dict:
        return json.loads(decode_urlsafe_base64(fields["signed_data"]))

    return _decode
