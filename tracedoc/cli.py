#!filepath: tracedoc/cli.py
from pathlib import Path
from typing import List, Optional

import typer
from rich import print

from tracedoc.assembler import DocumentAssembler
from tracedoc.config.app_config import AppConfig
from tracedoc.observability.instrumentation import Instrumentation
from tracedoc.renderers.registry import RendererRegistry
from tracedoc.store.loader import load_trace
from tracedoc.store.memory import DictActorRegistry
from tracedoc.utils.errors import UserInputError
from tracedoc.utils.logger import init_logging

app = typer.Typer(help="Tracedoc: render live trace directives inside Markdown")


@app.command()
def version():
    print("v0.1.0")


@app.command()
def render(
    document: Path = typer.Argument(..., help="Markdown document with {{directives}}"),
    trace: Path = typer.Option(..., "--trace", "-t", help="Trace file (JSONL or JSON array)"),
    actor: Optional[List[str]] = typer.Option(None, "--actor", "-a", help="Registered actor name (repeatable)"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write result here instead of stdout"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config (default: base.yml)"),
    timeline: bool = typer.Option(False, "--timeline", help="Log per-directive render timings"),
):
    """
    渲染一份文档：trace 文件 + actor 名单 -> Markdown
    """
    cfg = AppConfig.load(str(config) if config else None)
    init_logging(cfg.log)

    if not document.exists():
        print(f"[red]Document not found: {document}[/red]")
        raise typer.Exit(code=1)

    try:
        store = load_trace(trace)
    except (FileNotFoundError, UserInputError) as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    actors = DictActorRegistry({name: None for name in actor or []})
    assembler = DocumentAssembler(
        config=cfg.render,
        inst=Instrumentation(enabled=timeline),
    )

    text, report = assembler.render_with_report(
        document.read_text(encoding="utf-8"), store, actors
    )

    if out is None:
        typer.echo(text, nl=False)
    else:
        out.write_text(text, encoding="utf-8")
        print(
            f"[green]Rendered {report.rendered}/{report.spans} directives -> {out}[/green]"
        )

    if report.diagnostics:
        print(f"[yellow]{report.diagnostics} directive(s) rendered as diagnostics[/yellow]")


@app.command()
def directives():
    """
    列出所有已注册的 directive
    """
    for name in RendererRegistry.names():
        print(name)


if __name__ == "__main__":
    app()

# python -m tracedoc.cli render docs/design.md --trace trace.jsonl --actor producer
