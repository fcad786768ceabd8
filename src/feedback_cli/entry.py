#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import asyncio
import click

from rich.panel import Panel
from rich.text import Text

from feedback_cli.controller import ControllerSnapshot, State, SubmissionController
from feedback_cli.display import console, print_rule, render_demo_notice, render_snapshot, setup_logging
from feedback_cli.key_manager import KeyBindingManager, SessionFactory
from feedback_cli.utils import FIELDS, Config, FormData


# ========== Application Orchestrator ==========
class App:
    def __init__(self, cfg: Config):
        self.cfg = cfg
        self.controller = SubmissionController(cfg, listener=self._on_change)

        def accept(event):
            event.app.exit(result=event.current_buffer.text)

        def clear(event):
            event.app.exit(exception=KeyboardInterrupt())

        self.kbm = KeyBindingManager(accept_callback=accept, clear_callback=clear)
        self.session = SessionFactory.build_session(self.kbm.bindings)
        self.counter = 1

    def run(self):
        asyncio.run(self._run())

    async def _run(self):
        self._print_banner()

        try:
            while True:
                try:
                    await self._collect_fields()
                    await self._handle_submit()
                    self.counter += 1
                except KeyboardInterrupt:
                    console.print("[warn] Input cancelled.（Ctrl+C）[/warn]")
                    continue
                except EOFError:
                    console.print("\n[info]Exited.（Ctrl+D）[/info]")
                    break
                except Exception as e:
                    console.print(Panel.fit(Text(repr(e), no_wrap=False), title="Unexpected error !", border_style="red"))
                    self.counter += 1
                    continue
        finally:
            self.controller.dispose()

    # ========== Internal helpers ==========
    async def _collect_fields(self):
        current = self.controller.form
        for field in FIELDS:
            value = await self.session.prompt_async(
                    SessionFactory.make_prompt_fragments(self.counter, field),
                    default=getattr(current, field),
                    multiline=field == "comment",
                    lexer=SessionFactory.lexer_for(field),
            )
            self.controller.on_field_change(field, value)

    async def _handle_submit(self):
        if not self.controller.is_demo_mode:
            console.print(f"[info]Send feedback to ->[/info] {self.cfg.endpoint}")
        await self.controller.on_submit()
        render_snapshot(self.controller.snapshot())

    def _on_change(self, snapshot: ControllerSnapshot):
        if snapshot.is_submitting:
            console.print("[info]Sending...[/info]")

    def _print_banner(self):
        submit_hint = "、".join(self.kbm.submit_labels) or "Ctrl+J"
        print_rule("Feedback form")
        console.print(Panel.fit(
                Text(
                        "Descriptions：\n"
                        " - Next field：Enter\n"
                        f" - Submit comment：{submit_hint}\n"
                        " - Cancel：Ctrl+C\n"
                        " - Exit：Ctrl+D\n\n"
                        "The comment accepts multi-line markdown style text !",
                        no_wrap=False
                ),
                title="Help", border_style="cyan"
        ))
        if self.controller.is_demo_mode:
            render_demo_notice()
        else:
            console.print(f"[info]Your form endpoint：[/info]{self.cfg.endpoint}")
        if not self.cfg.verify_tls:
            console.print("[warn] Disable tls verification !（--insecure）[/warn]")


async def send_once(cfg: Config, form: FormData) -> bool:
    controller = SubmissionController(cfg)
    try:
        if controller.is_demo_mode:
            render_demo_notice()
        for field, value in form.as_payload().items():
            controller.on_field_change(field, value)
        status = await controller.on_submit()
        render_snapshot(controller.snapshot())
        return status.state is State.SUCCESS
    finally:
        controller.dispose()


# ========== CLI with Click ==========

@click.group()
@click.option("--endpoint", envvar="FEEDBACK_ENDPOINT", help="Form collection endpoint, e.g. https://formspree.io/f/<id>.")
@click.option("--timeout", type=float, default=30, show_default=True, help="Max timeout.")
@click.option("--insecure", is_flag=True, help="Whether disable tls.")
@click.option("--debug", "-d", is_flag=True, help="Start with debug mode.")
@click.pass_context
def cli(ctx, endpoint, timeout, insecure, debug):
    """
    feedback-cli: Send your name, e-mail and a comment to a feedback form!
    """
    setup_logging(debug)
    cfg = Config.from_options(endpoint, timeout, insecure, debug)
    ctx.obj = {"cfg": cfg}


@cli.command("run")
@click.pass_context
def run_cmd(ctx):
    """Start the interactive feedback form."""
    cfg = ctx.obj["cfg"]
    app = App(cfg)
    app.run()


@cli.command("send")
@click.option("--name", default="", help="Your name.")
@click.option("--email", default="", help="Your e-mail address.")
@click.option("--comment", default="", help="Your comment.")
@click.pass_context
def send_cmd(ctx, name, email, comment):
    """Submit the form once without prompting."""
    cfg = ctx.obj["cfg"]
    ok = asyncio.run(send_once(cfg, FormData(name=name, email=email, comment=comment)))
    ctx.exit(0 if ok else 1)


def main():
    cli(prog_name="feedback-cli")


if __name__ == "__main__":
    main()
