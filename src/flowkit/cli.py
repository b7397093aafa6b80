# src/flowkit/cli.py
"""flowkit Command Line Interface.

Entry point for the flowkit CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from flowkit import __version__
from flowkit.contracts import DatasetSource, DatasetSourceReadType, SourceReadError, StoreWorkflow
from flowkit.core.config import FlowkitSettings, load_settings

__all__ = ["app"]

app = typer.Typer(
    name="flowkit",
    help="flowkit: normalize, validate and chunk workflow data.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"flowkit version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(1)


def _load_settings_or_exit(ctx: typer.Context, settings: Path | None) -> FlowkitSettings:
    """Load settings, then apply their log level unless --verbose was given."""
    try:
        config = load_settings(settings.expanduser() if settings is not None else None)
    except FileNotFoundError:
        raise _fail(f"Error: Settings file not found: {settings}") from None
    except ValidationError as e:
        typer.secho("Configuration errors:", fg=typer.colors.RED, err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.secho(f"  - {loc}: {error['msg']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    options = ctx.obj or {}
    if not options.get("verbose"):
        from flowkit.core.logging import configure_logging

        configure_logging(json_output=options.get("json_logs", False), level=config.log_level)
    return config


def _load_workflow_or_exit(workflow: Path) -> StoreWorkflow:
    from flowkit.cli_helpers import load_workflow_file

    try:
        return load_workflow_file(workflow)
    except FileNotFoundError as e:
        raise _fail(f"Error: {e}") from None
    except yaml.YAMLError as e:
        raise _fail(f"Syntax error in {workflow}: {e}") from None
    except ValidationError as e:
        typer.secho("Workflow errors:", fg=typer.colors.RED, err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.secho(f"  - {loc}: {error['msg']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None
    except ValueError as e:
        raise _fail(f"Error: {e}") from None


_SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    "-s",
    help="Path to settings YAML file.",
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # We handle existence check ourselves for better error message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """flowkit: normalize, validate and chunk workflow data."""
    from flowkit.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(json_output=json_logs, level=log_level)
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def validate(
    ctx: typer.Context,
    workflow: Path = typer.Argument(..., help="Stored workflow (JSON or YAML)."),
    settings: Path | None = _SETTINGS_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON.",
    ),
) -> None:
    """Reconcile a stored workflow against the current templates and validate it.

    Exits with status 1 when any node needs attention.
    """
    from flowkit.core.workflow import (
        check_workflow_node_and_connection,
        identity_translate,
        store_node_to_flow_node,
    )

    config = _load_settings_or_exit(ctx, settings)
    stored = _load_workflow_or_exit(workflow)

    nodes = [store_node_to_flow_node(item, identity_translate) for item in stored.nodes]
    invalid = check_workflow_node_and_connection(
        nodes,
        stored.edges,
        check_edges=config.validation.check_dangling_edges,
    )

    if json_output:
        typer.echo(json.dumps({"valid": invalid is None, "invalidNodeIds": invalid or []}))
    elif invalid is None:
        typer.echo(f"Workflow valid: {len(nodes)} nodes, {len(stored.edges)} edges")
    else:
        typer.secho(f"Invalid nodes: {', '.join(invalid)}", fg=typer.colors.RED, err=True)

    if invalid is not None:
        raise typer.Exit(1)


@app.command()
def inspect(
    ctx: typer.Context,
    workflow: Path = typer.Argument(..., help="Stored workflow (JSON or YAML)."),
    settings: Path | None = _SETTINGS_OPTION,
) -> None:
    """Show what the chat box of a workflow offers.

    File selection is enabled when a chat or tool-call node uses a model
    configured with vision in the ``models:`` settings section.
    """
    from flowkit.cli_helpers import build_model_lookup
    from flowkit.core.chat import (
        check_chat_support_select_file_by_modules,
        get_app_question_guides_by_modules,
    )

    config = _load_settings_or_exit(ctx, settings)
    stored = _load_workflow_or_exit(workflow)

    select_file = check_chat_support_select_file_by_modules(stored.nodes, lookup=build_model_lookup(config))
    typer.echo(f"File selection: {'enabled' if select_file else 'disabled'}")

    guides = get_app_question_guides_by_modules(stored.nodes)
    if not guides:
        typer.echo("Question guide: (none)")
        return
    typer.echo("Question guide:")
    for text in guides:
        typer.echo(f"  - {text}")


@app.command()
def templates() -> None:
    """List registered node templates."""
    from flowkit.plugins import get_template_manager

    registered = get_template_manager().get_templates()
    if not registered:
        typer.echo("  (none available)")
        return
    for template in registered:
        typer.echo(f"  {template.flow_node_type:20} - {template.name}")


@app.command()
def chunk(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Text (or CSV, with --qa) file to split."),
    qa: bool = typer.Option(
        False,
        "--qa",
        help="Treat the file as a question/answer CSV table.",
    ),
    chunk_len: int | None = typer.Option(
        None,
        "--chunk-len",
        min=1,
        help="Maximum characters per chunk (default from settings).",
    ),
    settings: Path | None = _SETTINGS_OPTION,
) -> None:
    """Split a file into dataset chunks and print a summary."""
    from flowkit.core.dataset import raw_text_to_chunks

    config = _load_settings_or_exit(ctx, settings)
    if not file.exists():
        raise _fail(f"Error: File not found: {file}")

    chunks = raw_text_to_chunks(
        file.read_text(encoding="utf-8"),
        is_qa_import=qa,
        chunk_len=chunk_len or config.chunking.chunk_len,
        overlap_ratio=config.chunking.overlap_ratio,
        custom_reg=config.chunking.custom_reg,
    )
    typer.echo(f"{len(chunks)} chunks")
    for index, item in enumerate(chunks, start=1):
        suffix = f", answer {len(item.a)} chars" if item.a else ""
        typer.echo(f"  {index:4}: {len(item.q)} chars{suffix}")


@app.command()
def read(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Web page or file URL."),
    selector: str | None = typer.Option(
        None,
        "--selector",
        help="CSS selector limiting which part of a page is kept.",
    ),
    as_file: bool = typer.Option(
        False,
        "--file",
        help="Download the URL as a file instead of fetching it as a web page.",
    ),
    settings: Path | None = _SETTINGS_OPTION,
) -> None:
    """Print the raw text of a link or external-file dataset source."""
    from flowkit.cli_helpers import open_source_readers
    from flowkit.core.dataset import read_dataset_source_raw_text

    config = _load_settings_or_exit(ctx, settings)
    source = DatasetSource(
        team_id="local",
        tmb_id="local",
        type=DatasetSourceReadType.EXTERNAL_FILE if as_file else DatasetSourceReadType.LINK,
        source_id=url,
        selector=selector,
        external_file_id=url if as_file else None,
    )
    try:
        with open_source_readers(config) as readers:
            text = read_dataset_source_raw_text(source, readers)
    except SourceReadError as e:
        raise _fail(f"Error: {e.reason}") from None
    typer.echo(text)


if __name__ == "__main__":
    app()
