"""Tests for CLI entrypoint behavior."""

from datetime import datetime, timezone
from unittest.mock import patch

from typer.testing import CliRunner

from allauth_login import LoginClient, LoginResult, SessionCookie, __version__
from allauth_login.cli.main import app

runner = CliRunner()

SESSION = SessionCookie("abcdefghijklmnop", datetime(2099, 1, 1, tzinfo=timezone.utc))


def _logged_in(form, cookies):
    cookies.set_cookie("sessionid", SESSION.session_id, expires=SESSION.expires_at, secure=True, httponly=True)
    return LoginResult.authenticated(SESSION)


def test_root_version_option():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"allauth-login {__version__}"


def test_version_subcommand():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"allauth-login {__version__}"


def test_login_success():
    with patch.object(LoginClient, "login", side_effect=_logged_in) as mock_login:
        result = runner.invoke(app, ["login", "-u", "Ada", "-p", "secret"])

    assert result.exit_code == 0
    assert "Logged in." in result.stdout
    assert "abcd...mnop" in result.stdout
    form = mock_login.call_args[0][0]
    assert form == {"username": "Ada", "password": "secret", "totp": ""}


def test_login_prompts_for_code():
    attempts = [LoginResult.mfa_pending(), None]

    def fake_login(form, cookies):
        result = attempts.pop(0)
        return result or _logged_in(form, cookies)

    with patch.object(LoginClient, "login", side_effect=fake_login) as mock_login:
        result = runner.invoke(app, ["login", "-u", "ada", "-p", "secret"], input="123456\n")

    assert result.exit_code == 0
    assert mock_login.call_count == 2
    assert mock_login.call_args[0][0]["totp"] == "123456"


def test_login_failure_exits_nonzero():
    with patch.object(LoginClient, "login", return_value=LoginResult.rejected("settings.invalid_credentials")):
        result = runner.invoke(app, ["login", "-u", "ada", "-p", "wrong"])

    assert result.exit_code == 1
    assert "settings.invalid_credentials" in result.stdout
