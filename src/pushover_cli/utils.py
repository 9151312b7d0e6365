import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pushover_cli.errors import ConfigError

DEFAULT_API_URL = "https://api.pushover.net/1/messages.json"
DEFAULT_TIMEOUT = 30
CONFIG_PATH = Path("~/.pushover.cli.toml")

ENV_TOKEN = "PUSHOVER_TOKEN"
ENV_USER = "PUSHOVER_USER"
ENV_URL = "PUSHOVER_API_URL"
ENV_CONFIG = "PUSHOVER_CLI_CONFIG"


def mask_token(token: Optional[str]) -> str:
    if not token:
        return "<unset>"
    if len(token) <= 6:
        return "***"
    return f"{token[:3]}...{token[-3:]}"


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the TOML config file, returning {} when it does not exist."""
    if path is None:
        path = Path(os.environ.get(ENV_CONFIG) or CONFIG_PATH)
    path = path.expanduser()
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc


# ========== Config & Models ==========
@dataclass
class Config:
    token: Optional[str] = None
    user: Optional[str] = None
    url: str = DEFAULT_API_URL
    timeout: int = DEFAULT_TIMEOUT
    device: Optional[str] = None
    debug: bool = False

    @classmethod
    def init_form_args(cls, args, file_values: Optional[Dict[str, Any]] = None) -> "Config":
        """Merge CLI args over environment over the config file over defaults."""
        if file_values is None:
            file_values = load_config_file()

        def pick(arg_value, env_name: Optional[str], key: str, default=None):
            if arg_value is not None:
                return arg_value
            if env_name and os.environ.get(env_name):
                return os.environ[env_name]
            if file_values.get(key) is not None:
                return file_values[key]
            return default

        timeout = pick(getattr(args, "timeout", None), None, "timeout", DEFAULT_TIMEOUT)
        try:
            timeout = int(timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"timeout must be an integer, got {timeout!r}") from exc

        return cls(
            token=pick(getattr(args, "token", None), ENV_TOKEN, "token"),
            user=pick(getattr(args, "user", None), ENV_USER, "user"),
            url=pick(getattr(args, "url", None), ENV_URL, "url", DEFAULT_API_URL),
            timeout=timeout,
            device=pick(getattr(args, "device", None), None, "device"),
            debug=bool(getattr(args, "debug", False)),
        )

    def require_token(self) -> str:
        if not self.token:
            raise ConfigError(f"No API token: pass --token, set {ENV_TOKEN} or add `token` to {CONFIG_PATH}")
        return self.token


@dataclass
class SubmitResult:
    ok: bool
    status_code: Optional[int]
    text: str
    request_id: Optional[str] = None
