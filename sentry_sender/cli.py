# -*- coding: utf-8 -*-
import logging
from pathlib import Path
from typing import Optional

import typer

from sentry_sender.auth import authorization_header
from sentry_sender.client import Client
from sentry_sender.config import SenderConfig, load_config
from sentry_sender.console import main_console as console
from sentry_sender.constants import CONFIG, EXIT_CODE_FAILURE
from sentry_sender.dsn import parse_dsn
from sentry_sender.errors import InvalidConfigurationError, SentrySenderError
from sentry_sender.meta import get_client_identifier, get_platform_description
from sentry_sender.models import DispatchMode

LOG = logging.getLogger(__name__)

CLI_MAIN_INTRODUCTION = "Inspect the Sentry configuration and send test events."
CLI_DSN_HELP = "DSN to use instead of SENTRY_DSN or the config file."
CLI_CONFIG_HELP = "Path to the config.ini file."
CLI_DEBUG_HELP = "Enable debug logging."
CLI_CREDENTIALS_HELP = "Show the store endpoint and keys derived from the DSN."
CLI_AUTH_HEADER_HELP = "Print a freshly signed X-Sentry-Auth header."
CLI_SEND_TEST_HELP = "Send a test event and report whether Sentry accepted it."
DEFAULT_TEST_MESSAGE = "Testing sending Sentry event"

cli = typer.Typer(rich_markup_mode="rich", help=CLI_MAIN_INTRODUCTION)


def configure_logger(debug: bool) -> None:
    level = logging.CRITICAL

    if debug:
        level = logging.DEBUG

    logging.basicConfig(format="%(asctime)s %(name)s => %(message)s", level=level)


def mask_secret(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)

    return secret[:4] + "*" * (len(secret) - 4)


def get_config(ctx: typer.Context) -> SenderConfig:
    """
    Resolve the configuration for a command, exiting on invalid settings.
    """
    try:
        return load_config(dsn=ctx.obj["dsn"], config_path=ctx.obj["config_path"])
    except SentrySenderError as e:
        console.print(f"[bad]{e.message}[/bad]")
        raise typer.Exit(code=e.get_exit_code())
    except ValueError as e:
        console.print(f"[bad]{e}[/bad]")
        raise typer.Exit(code=EXIT_CODE_FAILURE)


@cli.callback()
def main(
    ctx: typer.Context,
    dsn: Optional[str] = typer.Option(None, "--dsn", help=CLI_DSN_HELP),
    config_path: Path = typer.Option(CONFIG, "--config", help=CLI_CONFIG_HELP),
    debug: bool = typer.Option(False, "--debug", help=CLI_DEBUG_HELP),
) -> None:
    configure_logger(debug)
    LOG.info("Running %s on %s", get_client_identifier(), get_platform_description())

    ctx.obj = {"dsn": dsn, "config_path": config_path}


@cli.command(help=CLI_CREDENTIALS_HELP)
def credentials(ctx: typer.Context) -> None:
    config = get_config(ctx)

    try:
        creds = parse_dsn(config.dsn)
    except InvalidConfigurationError as e:
        console.print(f"[bad]{e.message}[/bad]")
        raise typer.Exit(code=EXIT_CODE_FAILURE)

    console.print(f"[file_title]Endpoint:[/file_title] {creds.endpoint}")
    console.print(f"[file_title]Public key:[/file_title] {creds.public_key}")
    console.print(
        f"[file_title]Secret key:[/file_title] {mask_secret(creds.secret_key)}"
    )


@cli.command(name="auth-header", help=CLI_AUTH_HEADER_HELP)
def auth_header(
    public_key: str = typer.Argument(...),
    secret_key: str = typer.Argument(...),
) -> None:
    console.print(authorization_header(public_key, secret_key), markup=False)


@cli.command(name="send-test", help=CLI_SEND_TEST_HELP)
def send_test(
    ctx: typer.Context,
    message: str = typer.Option(DEFAULT_TEST_MESSAGE, "--message", "-m"),
    mode: DispatchMode = typer.Option(DispatchMode.SYNC, "--mode"),
) -> None:
    config = get_config(ctx)

    with Client(config) as client:
        result = client.capture_message(message, result=mode, sample_rate=1.0)
        result = result.wait()

    if not result.succeeded:
        console.print("[bad]Sentry did not accept the test event.[/bad]")
        raise typer.Exit(code=EXIT_CODE_FAILURE)

    if result.event_id:
        console.print(f"[good]Test event sent:[/good] {result.event_id}")
    else:
        console.print("[good]Test event handed to the background worker.[/good]")
