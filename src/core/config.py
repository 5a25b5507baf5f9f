"""Client configuration.

- `ServiceSettings` centralizes environment variables (pydantic-settings) so
  the CLI and adapters read credentials and timeouts the same way.
- The per-user `.env` helpers back the `doctor setup` command.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import set_key
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typer import get_app_dir

from core.errors import ConfigurationError

DEFAULT_SERVICE_URL = "https://stream.watsonplatform.net/speech-to-text/api"
DEFAULT_IAM_URL = "https://iam.bluemix.net/identity/token"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (`~/.config/speech-to-text` on Linux)."""

    return Path(get_app_dir("speech-to-text"))


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write or update variables in the user's global `.env`.

    Keys with a `None` value are left untouched; existing keys not present in
    `values` are preserved.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    if not env_path.exists():
        env_path.write_text("# Speech to Text client user config (.env)\n", encoding="utf-8")

    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class ServiceSettings(BaseSettings):
    """Connection settings for the Speech to Text service.

    Values come from `SPEECH_TO_TEXT_*` environment variables, the project
    `.env`, and then the per-user `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPEECH_TO_TEXT_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    url: str = Field(
        default=DEFAULT_SERVICE_URL,
        min_length=8,
        description="Base URL of the service (without the `v1` prefix).",
    )
    username: str | None = Field(
        default=None,
        description="Basic-auth username.",
    )
    password: str | None = Field(
        default=None,
        description="Basic-auth password.",
    )
    iam_apikey: str | None = Field(
        default=None,
        description="IAM API key, exchanged for bearer tokens on demand.",
    )
    iam_access_token: str | None = Field(
        default=None,
        description="Pre-issued IAM bearer token (caller manages its refresh).",
    )
    iam_url: str = Field(
        default=DEFAULT_IAM_URL,
        min_length=8,
        description="IAM token endpoint.",
    )
    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="speech-to-text-v1-python/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    learning_opt_out: bool = Field(
        default=False,
        description="Send `X-Watson-Learning-Opt-Out: true` on every request.",
    )

    @model_validator(mode="after")
    def _check_basic_auth_pair(self) -> "ServiceSettings":
        if bool(self.username) != bool(self.password):
            raise ConfigurationError("username and password must be set together")
        return self

    @property
    def auth_mode(self) -> str:
        """Name of the authentication scheme that `build_client` will use."""

        if self.iam_access_token:
            return "bearer"
        if self.iam_apikey:
            return "iam"
        if self.username and self.password:
            return "basic"
        return "none"

    def default_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"User-Agent": self.user_agent}
        if self.learning_opt_out:
            headers["X-Watson-Learning-Opt-Out"] = "true"
        return headers
