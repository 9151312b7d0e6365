import logging
from typing import Sequence, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from pushover_cli.errors import DeliveryRejectedError, FieldError, PushoverError, TransportError
from pushover_cli.utils import SubmitResult, mask_token

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=debug)
    root = logging.getLogger("pushover_cli")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False


def info_panel(title: str, msg: str, style: str = "cyan"):
    console.print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def error_panel(title: str, msg: str):
    info_panel(title, msg, style="red")


def success_panel(result: SubmitResult, debug: bool = False):
    if debug:
        info_panel("Success", f"Status: {result.status_code}\nResponse: {result.text}", style="green")
    else:
        console.print(Text(f"Message sent ! (request {result.request_id or '-'})"))


def failure_panel(exc: PushoverError):
    if isinstance(exc, TransportError):
        error_panel("Network error.", str(exc))
    elif isinstance(exc, DeliveryRejectedError):
        lines = [f"Status: {exc.status}", f"HTTP: {exc.http_status}"]
        lines.extend(f" - {err}" for err in exc.errors)
        if exc.request_id:
            lines.append(f"Request: {exc.request_id}")
        error_panel("Rejected by server.", "\n".join(lines))
    elif isinstance(exc, FieldError):
        error_panel("Invalid message.", f"Field '{exc.field}': {exc.detail}")
    else:
        error_panel("Error.", str(exc))


def form_table(form: Sequence[Tuple[str, str]]) -> Table:
    table = Table(title="Encoded form", show_lines=False)
    table.add_column("field", style="info")
    table.add_column("value")
    for name, value in form:
        table.add_row(name, mask_token(value) if name == "token" else value)
    return table
