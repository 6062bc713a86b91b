"""Command line interface for the Tozny realm API."""

from __future__ import annotations

import asyncio
import json
from typing import Dict, List, NoReturn, Optional

import typer

from tozny_auth.config import ToznyConfig, load_config
from tozny_auth.envelope import build_envelope
from tozny_auth.errors import (
    InvalidSignatureError,
    MalformedClaimsError,
    ReservedParamError,
    ToznyError,
)
from tozny_auth.login import verify_login
from tozny_auth.realm import Realm
from tozny_auth.transports import get_transport

app = typer.Typer(help="CLI for the Tozny authentication API")

# Command groups
realm_app = typer.Typer(help="Signed calls made with the realm secret")
login_app = typer.Typer(help="Commands for login assertions")

app.add_typer(realm_app, name="realm")
app.add_typer(login_app, name="login")

PARAM_OPTION = typer.Option(
    None, "--param", "-p", help="Method parameter as key=value; may be repeated"
)


@app.callback()
def main() -> None:
    """Tozny CLI entry point."""
    pass


def _parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


def _require_credentials(config: ToznyConfig) -> tuple[str, str]:
    if not config.realm.key_id or not config.realm.secret:
        typer.secho(
            "Realm credentials missing: set TOZNY_REALM_KEY_ID and TOZNY_REALM_SECRET",
            fg=typer.colors.RED,
        )
        raise typer.Exit(code=1)
    return config.realm.key_id, config.realm.secret


def _load_realm() -> Realm:
    config = load_config()
    key_id, secret = _require_credentials(config)
    return Realm(
        key_id,
        secret,
        config.api_url,
        transport=get_transport(config=config),
        timeout=config.http.timeout,
    )


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@realm_app.command("call")
def realm_call(method: str, param: Optional[List[str]] = PARAM_OPTION) -> None:
    """
    Invoke a realm API method and print the JSON reply.

    Example:
        tozny-auth realm call realm.user_get -p user_id=sid_1234
    """
    realm = _load_realm()
    params = _parse_params(param)
    try:
        reply = asyncio.run(realm.call(method, params))
    except ToznyError as e:
        _fail(f"{method} failed: {e}")
    typer.echo(json.dumps(reply, indent=2))


@realm_app.command("user-get")
def realm_user_get(user_id: str) -> None:
    """Print a user's record."""
    realm = _load_realm()
    try:
        user = asyncio.run(realm.user_get(user_id))
    except ToznyError as e:
        _fail(f"realm.user_get failed: {e}")
    typer.echo(json.dumps(user, indent=2))


@realm_app.command("user-exists")
def realm_user_exists(user_id: str) -> None:
    """Print whether a user is enrolled; exits 1 if not."""
    realm = _load_realm()
    try:
        exists = asyncio.run(realm.user_exists(user_id))
    except ToznyError as e:
        _fail(f"realm.user_exists failed: {e}")
    typer.echo("true" if exists else "false")
    if not exists:
        raise typer.Exit(code=1)


@login_app.command("verify")
def login_verify(signed_data: str, signature: str) -> None:
    """
    Verify a login assertion with the realm secret and print its claims.

    Expiry is reported but not enforced.
    """
    config = load_config()
    _, secret = _require_credentials(config)
    try:
        claims = verify_login(secret, signed_data, signature)
    except InvalidSignatureError:
        _fail("Invalid signature: assertion was tampered with or signed with another secret")
    except MalformedClaimsError as e:
        _fail(f"Malformed login claims: {e}")
    typer.echo(claims.model_dump_json(indent=2))
    if claims.is_expired():
        typer.secho("Warning: assertion has expired", fg=typer.colors.YELLOW)


@app.command("envelope")
def envelope(method: str, param: Optional[List[str]] = PARAM_OPTION) -> None:
    """Print a signed request envelope without sending it."""
    config = load_config()
    key_id, secret = _require_credentials(config)
    try:
        pair = build_envelope(key_id, secret, method, _parse_params(param))
    except ReservedParamError as e:
        _fail(str(e))
    typer.echo(pair.model_dump_json(indent=2))
