"""JSON diff CLI."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import TextIO

import click

from jsondiffview import __version__
from jsondiffview.canonical import serialize_canonical
from jsondiffview.config import DiffConfig
from jsondiffview.errors import ParseFailure
from jsondiffview.formatter import format_failure
from jsondiffview.line_diff import HunkKind
from jsondiffview.parser import parse
from jsondiffview.pipeline import compare

EXIT_DIFFERENCES = 1
EXIT_PARSE_ERROR = 2

LINE_COLORS = {
    HunkKind.ADDED: "green",
    HunkKind.REMOVED: "red",
    HunkKind.UNCHANGED: None,
}


def handle_error(error: Exception, debug: bool) -> None:
    """Handle errors with structured output.

    Args:
        error: The exception that occurred
        debug: Whether to show full traceback
    """
    if debug:
        traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def load_config(config_path: Path | None) -> DiffConfig:
    """Config from a YAML file if given, else from the environment."""
    if config_path is not None:
        return DiffConfig.from_yaml(config_path)
    return DiffConfig.from_env()


@click.group()
@click.version_option(version=__version__, prog_name="jsondiff")
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML configuration file')
@click.option('--debug', is_flag=True, help='Enable debug logging and full tracebacks')
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, debug: bool):
    """JSON Diff - line diffs of JSON documents."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    try:
        ctx.obj['config'] = load_config(config_path)
    except Exception as e:
        handle_error(e, debug)


@cli.command()
@click.argument('before', type=click.File('r', encoding='utf-8'))
@click.argument('after', type=click.File('r', encoding='utf-8'))
@click.option('--sort-keys/--no-sort-keys', default=None, help='Ignore object key order')
@click.option('--ignore-array-order/--respect-array-order', default=None, help='Ignore array element order')
@click.option('--color/--no-color', default=None, help='Colorize output (default: auto)')
@click.option('--out', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Write the diff to a file')
@click.option('--fail-on-diff', is_flag=True, help='Exit with status 1 when the documents differ')
@click.pass_context
def diff(
    ctx: click.Context,
    before: TextIO,
    after: TextIO,
    sort_keys: bool | None,
    ignore_array_order: bool | None,
    color: bool | None,
    out: Path | None,
    fail_on_diff: bool,
):
    """Show a line diff between BEFORE and AFTER (use - for stdin).

    Examples:
      jsondiff diff old.json new.json
      jsondiff diff --ignore-array-order old.json new.json
      cat new.json | jsondiff diff old.json -
    """
    debug = ctx.obj.get('debug', False)
    try:
        config = ctx.obj['config'].with_overrides(sort_keys=sort_keys, ignore_array_order=ignore_array_order)
        result = compare(before.read(), after.read(), config=config)

        if isinstance(result, ParseFailure):
            message = format_failure(result)
            if out:
                out.write_text(message + "\n", encoding="utf-8")
            click.echo(f"{message} ({result.side})", err=True)
            ctx.exit(EXIT_PARSE_ERROR)

        if out:
            out.write_text(result.text + "\n", encoding="utf-8")
            stats = result.stats
            click.echo(f"Diff written to {out} (+{stats.added} -{stats.removed})")
        else:
            for line in result.lines:
                click.secho(line.prefixed, fg=LINE_COLORS[line.kind], color=color)

        if fail_on_diff and not result.identical:
            ctx.exit(EXIT_DIFFERENCES)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        handle_error(e, debug)


@cli.command(name="format")
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--in-place', '-i', is_flag=True, help='Rewrite the file instead of printing')
@click.pass_context
def format_cmd(ctx: click.Context, source: Path, in_place: bool):
    """Pretty-print a JSON document without reordering it."""
    debug = ctx.obj.get('debug', False)
    try:
        config = ctx.obj['config']
        value = parse(source.read_text(encoding="utf-8"), config)
        if isinstance(value, ParseFailure):
            click.echo(f"{format_failure(value)} ({source})", err=True)
            ctx.exit(EXIT_PARSE_ERROR)

        formatted = serialize_canonical(value, indent=config.indent)
        if in_place:
            source.write_text(formatted + "\n", encoding="utf-8")
            click.echo(f"Formatted {source}")
        else:
            click.echo(formatted)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        handle_error(e, debug)


@cli.command()
@click.option('--host', '-h', default='127.0.0.1', help='Host to bind to')
@click.option('--port', '-p', default=8000, help='Port to listen on')
@click.option('--debug', 'serve_debug', is_flag=True, help='Include tracebacks in error responses')
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, serve_debug: bool):
    """Start the JSON diff HTTP server.

    Examples:
      jsondiff serve                 # Start server on default port
      jsondiff serve --port 8080     # Start on port 8080
      jsondiff serve --debug         # Tracebacks in error envelopes
    """
    debug = serve_debug or ctx.obj.get('debug', False)
    try:
        import uvicorn

        from jsondiffview.server import create_app

        click.echo(f"Starting JSON diff server on http://{host}:{port}")
        click.echo(f"API documentation: http://{host}:{port}/docs")

        app = create_app(config=ctx.obj['config'], debug=debug)

        click.echo("\nPress Ctrl+C to stop the server\n")
        uvicorn.run(app, host=host, port=port, log_level="debug" if debug else "info")

    except ImportError as e:
        click.echo(f"Error: Server dependencies not installed: {e}", err=True)
        click.echo("Install with: pip install 'jsondiffview[server]'", err=True)
        sys.exit(1)
    except Exception as e:
        handle_error(e, debug)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
