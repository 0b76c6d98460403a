"""Click-based diagnostic CLI for the noodlbox hooks."""

import sys
from pathlib import Path

import click

from .config import load_config
from .errors import ConfigurationError, HookError
from .hook_logging import setup_logging
from .hooks.dispatcher import HookDispatcher, run_hook
from .query.extractors import extract_query_from_tool
from .search.formatting import format_search_message, parse_search_results
from .storage.repo_cache import RepositoryCacheReader

TOOL_NAMES = ("Glob", "Grep", "Bash")


@click.group()
@click.version_option(package_name="noodlbox-hooks")
@click.option("--verbose", "-v", is_flag=True, help="Print debug logs to stderr")
@click.option(
    "--settings",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.noodlbox/hooks.json)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, settings: Path | None) -> None:
    """noodlbox hooks - semantic search augmentation for Claude Code."""
    overrides = {"debug": True} if verbose else {}
    config = load_config(settings, **overrides)
    setup_logging(debug=config.debug, log_file=config.log_file, log_format=config.log_format)
    ctx.obj = config


@cli.command()
@click.pass_obj
def run(config) -> None:
    """Run the hook on the event read from stdin."""
    output, exit_code = run_hook(sys.stdin.read(), HookDispatcher.from_config(config))
    if output is not None:
        click.echo(output)
    sys.exit(exit_code)


@cli.command()
@click.argument("tool")
@click.argument("value")
@click.pass_obj
def extract(config, tool: str, value: str) -> None:
    """Show the query extracted from a Glob/Grep pattern or Bash command."""
    try:
        if tool not in TOOL_NAMES:
            raise ConfigurationError(
                f"Unknown tool: {tool}",
                suggestion=f"Use one of: {', '.join(TOOL_NAMES)}",
            )
        key = "command" if tool == "Bash" else "pattern"
        query = extract_query_from_tool(
            tool,
            {key: value},
            max_command_length=config.max_command_length,
            min_length=config.min_query_length,
        )
    except HookError as e:
        click.echo(e.format(), err=True)
        sys.exit(e.exit_code)

    if query is None:
        click.echo("(no query)")
        sys.exit(1)
    click.echo(query)


@cli.command()
@click.option(
    "--cwd",
    default=None,
    help="Directory to resolve (default: current directory)",
)
@click.pass_obj
def lookup(config, cwd: str | None) -> None:
    """Show whether a directory is in an indexed repository."""
    reader = RepositoryCacheReader(config.cache_file, ttl_ms=config.cache_ttl_ms)
    result = reader.lookup(cwd or str(Path.cwd()))

    click.echo(f"Status: {result.status.value}")
    if result.is_indexed:
        click.echo(f"Repository: {result.repository_name} ({result.repository_id})")


@cli.command("format")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--query", "-q", default="query", help="Query shown in the header")
def format_results(source, query: str) -> None:
    """Render raw noodl search output (file or stdin) as a summary."""
    summary = parse_search_results(source.read())
    click.echo(format_search_message(query, summary))


if __name__ == "__main__":
    cli()
