"""Login command for the allauth-login CLI."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from allauth_login.client import LoginClient
from allauth_login.config import SESSION_COOKIE_NAME
from allauth_login.session import ResponseCookies
from allauth_login.types import LoginResult, LoginState

console = Console()


def _mask(session_id: str) -> str:
    if len(session_id) >= 12:
        return session_id[:4] + "..." + session_id[-4:]
    return "***"


def _attempt(client: LoginClient, username: str, password: str, totp: str | None) -> tuple[LoginResult, ResponseCookies]:
    cookies = ResponseCookies()
    form = {"username": username, "password": password, "totp": totp or ""}
    return client.login(form, cookies), cookies


def login(
    username: str = typer.Option(..., "--username", "-u", help="Account username"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Account password"),
    totp: Optional[str] = typer.Option(None, "--totp", help="One-time code from your authenticator app"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Auth backend URL (default: $PUBLIC_SERVER_URL)"),
) -> None:
    """Log in and print the resulting session.

    Prompts for a one-time code when the account has a second factor enrolled.
    """
    client = LoginClient(base_url)
    result, cookies = _attempt(client, username, password, totp)

    if result.state is LoginState.MFA_PENDING:
        code = typer.prompt("One-time code")
        result, cookies = _attempt(client, username, password, code)

    if not result.redirect:
        console.print(f"[red]Login failed: {result.message}[/red] (HTTP {result.status_code})")
        raise typer.Exit(1)

    console.print("[green]Logged in.[/green]")
    cookie = cookies.get(SESSION_COOKIE_NAME)
    if cookie is None:
        console.print("[yellow]The backend did not send a session cookie.[/yellow]")
        return
    console.print(f"  Session: {_mask(cookie.value)}")
    if cookie.expires is not None:
        console.print(f"  Expires: {cookie.expires.isoformat()}")
