"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.speech_to_text import SpeechToTextV1
from core.config import ServiceSettings, get_user_env_file, write_user_env_vars
from core.errors import SpeechToTextError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_service(settings: ServiceSettings) -> tuple[bool, str]:
    """Call `list_models`, the cheapest authenticated request."""

    try:
        with SpeechToTextV1(settings) as stt:
            response = stt.list_models()
    except SpeechToTextError as exc:
        return False, str(exc)
    count = len(response.result.models) if response.result else 0
    return True, f"HTTP {response.status_code}, {count} models"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = ServiceSettings()
    except (SpeechToTextError, ValueError) as exc:
        _console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Speech to Text Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Service URL", "OK", settings.url)
    if settings.auth_mode == "none":
        table.add_row("Credentials", "MISSING", "Set an IAM API key or username/password")
    else:
        table.add_row("Credentials", "OK", f"auth: {settings.auth_mode}")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Learning opt-out", "ON" if settings.learning_opt_out else "OFF", "")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "NONE", str(env_file))

    # Connectivity
    ok_http, detail_http = _check_service(settings)
    table.add_row("Service connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if settings.auth_mode == "none":
        _console.print("\n[yellow]Note:[/yellow] run `stt doctor setup` to store credentials.")
    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores credentials in the user config .env)."""

    url = typer.prompt(
        "Service URL",
        default=ServiceSettings.model_fields["url"].default,
        show_default=True,
    ).strip()
    mode = typer.prompt("Auth mode (iam/basic)", default="iam", show_default=True).strip().lower()

    values: dict[str, str | None] = {"SPEECH_TO_TEXT_URL": url}
    if mode == "iam":
        values["SPEECH_TO_TEXT_IAM_APIKEY"] = typer.prompt("IAM API key", hide_input=True).strip()
    elif mode == "basic":
        values["SPEECH_TO_TEXT_USERNAME"] = typer.prompt("Username").strip()
        values["SPEECH_TO_TEXT_PASSWORD"] = typer.prompt("Password", hide_input=True).strip()
    else:
        raise typer.BadParameter("auth mode must be 'iam' or 'basic'")

    if not url:
        raise typer.BadParameter("service URL is required")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
