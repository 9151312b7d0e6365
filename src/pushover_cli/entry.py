#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import signal
from typing import Optional

import click
from prompt_toolkit.application.current import get_app
from prompt_toolkit.document import Document
from rich.panel import Panel
from rich.text import Text

from pushover_cli.client import Client, initialize
from pushover_cli.display import (
    console,
    error_panel,
    failure_panel,
    form_table,
    setup_logging,
    success_panel,
)
from pushover_cli.encoder import validate_and_encode
from pushover_cli.errors import ConfigError, PushoverError
from pushover_cli.key_manager import KeyBindingManager, SessionFactory
from pushover_cli.message import Message
from pushover_cli.utils import Config, mask_token


def build_client(cfg: Config) -> Client:
    return initialize(cfg.require_token(), cfg.url, cfg.timeout)


# ========== Interactive Orchestrator ==========
class App:
    def __init__(self, cfg: Config, client: Client, title: Optional[str] = None, priority: int = 0):
        self.cfg = cfg
        self.client = client
        self.title = title
        self.priority = priority

        def accept():
            app = get_app()
            buf = app.current_buffer
            app.exit(result=buf.text)

        def clear():
            raise KeyboardInterrupt()

        self.kbm = KeyBindingManager(accept_callback=accept, clear_callback=clear)
        self.session = SessionFactory.build_session(self.kbm.bindings)
        self.counter = 1

    def run(self):
        self._print_banner()

        while True:
            try:
                text = self.session.prompt(SessionFactory.make_prompt_fragments(self.counter))
                self._handle_submit(text)
                self.counter += 1
            except KeyboardInterrupt:
                console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                try:
                    app = get_app()
                    app.current_buffer.document = Document(text="")
                except Exception:
                    pass
                continue
            except EOFError:
                console.print("\n[info]Exited.（Ctrl+D）[/info]")
                break
            except Exception as e:
                console.print(Panel.fit(Text(repr(e), no_wrap=False), title="Unexpected error !", border_style="red"))
                self.counter += 1
                continue

    # ========== Internal helpers ==========
    def _handle_submit(self, text: str):
        msg = Message(
            user=self.cfg.user or "",
            message=text.strip(),
            title=self.title,
            device=self.cfg.device,
            priority=self.priority,
        )
        console.print(f"[info]Push to ->[/info] {mask_token(msg.user)}")
        try:
            result = self.client.send(msg)
        except PushoverError as exc:
            failure_panel(exc)
            return
        success_panel(result, debug=self.cfg.debug)

    def _print_banner(self):
        submit_hint = "、".join(self.kbm.submit_labels) or "Ctrl+J"
        console.rule("[info]Start[/info]")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        f" - Submit：{submit_hint}\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D\n\n"
                        "Every submitted text is pushed as one notification.",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        console.print(f"[info]Pushover api：[/info]{self.cfg.url}")
        console.print(f"[info]User：[/info]{mask_token(self.cfg.user)}")


# ========== CLI with Click ==========

@click.group()
@click.option("--token", help="Application API token (30 chars). Also PUSHOVER_TOKEN or ~/.pushover.cli.toml.")
@click.option("--user", help="User or group key to notify. Also PUSHOVER_USER.")
@click.option("--url", help="Messages API endpoint.")
@click.option("--timeout", type=int, help="Max timeout in seconds.  [default: 30]")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, token, user, url, timeout, debug):
    """
    pushover-cli: push notifications to your devices from the command line!
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    setup_logging(debug)
    # Simulate argparse.Namespace for Config.init_form_args
    class Args:
        pass
    args = Args()
    args.token = token
    args.user = user
    args.url = url
    args.timeout = timeout
    args.debug = debug
    try:
        cfg = Config.init_form_args(args)
    except ConfigError as exc:
        error_panel("Config error.", str(exc))
        ctx.exit(1)
    ctx.obj = {"cfg": cfg}


def message_options(func):
    options = [
        click.option("--title", help="Message title, up to 250 chars."),
        click.option("--device", help="Target device name, up to 25 chars."),
        click.option("--url-link", "url_link", help="Supplementary URL, up to 512 chars."),
        click.option("--url-title", "url_title", help="Title for --url-link, up to 100 chars."),
        click.option("--time", "timestamp", type=int, help="Unix timestamp shown as the message time."),
        click.option("--sound", help="Notification sound name."),
        click.option("--priority", type=int, default=0, show_default=True, help="-2..2, clamped."),
        click.option("--retry", type=int, default=0, help="Seconds between retries for priority 2 (30..86400)."),
        click.option("--expire", type=int, default=0, help="Seconds before giving up for priority 2 (30..86400)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def make_message(cfg: Config, message: str, **opts) -> Message:
    return Message(
        user=cfg.user or "",
        message=message,
        title=opts.get("title"),
        device=opts.get("device") or cfg.device,
        url=opts.get("url_link"),
        url_title=opts.get("url_title"),
        time=opts.get("timestamp") or 0,
        sound=opts.get("sound"),
        priority=opts.get("priority") or 0,
        retry=opts.get("retry") or 0,
        expire=opts.get("expire") or 0,
    )


@cli.command("send")
@click.argument("message")
@message_options
@click.pass_context
def send_cmd(ctx, message, **opts):
    """Send MESSAGE as one notification."""
    cfg = ctx.obj["cfg"]
    msg = make_message(cfg, message, **opts)
    try:
        result = build_client(cfg).send(msg)
    except PushoverError as exc:
        failure_panel(exc)
        ctx.exit(1)
    success_panel(result, debug=cfg.debug)


@cli.command("check")
@click.argument("message")
@message_options
@click.pass_context
def check_cmd(ctx, message, **opts):
    """Validate MESSAGE and print the form that would be sent."""
    cfg = ctx.obj["cfg"]
    msg = make_message(cfg, message, **opts)
    try:
        form = validate_and_encode(msg, cfg.token or "")
    except PushoverError as exc:
        failure_panel(exc)
        ctx.exit(1)
    console.print(form_table(form))


@cli.command("run")
@click.option("--title", help="Title used for every message.")
@click.option("--priority", type=int, default=0, show_default=True, help="Priority used for every message.")
@click.pass_context
def run_cmd(ctx, title, priority):
    """Start the interactive pushover prompt."""
    cfg = ctx.obj["cfg"]
    try:
        client = build_client(cfg)
    except PushoverError as exc:
        failure_panel(exc)
        ctx.exit(1)
    app = App(cfg, client, title=title, priority=priority)
    app.run()


def main():
    cli(prog_name="pushover-cli")


if __name__ == "__main__":
    main()
