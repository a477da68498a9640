"""CLI entry point — command definitions using Click.

Running ``jira-report`` with no command generates the report.

Commands:
    run     Fetch the three searches and write the JSON summary + HTML report
    init    Generate a template config file
"""

import functools
import sys

import click

from jira_report import __version__


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_client(ctx: click.Context):
    """Load config and return a ready JiraClient. Exits on error."""
    from jira_report.client import JiraClient
    from jira_report.config import ConfigError, load

    obj = ctx.obj
    try:
        config = load(obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    if obj["verbose"]:
        click.echo(f"[verbose] Connecting to {config.url} as {config.email}", err=True)

    return config, JiraClient(url=config.url, email=config.email, token=config.token)


def _echo_progress(fetched: int, total: int) -> None:
    click.echo(f"[JQL] Fetched {fetched}/{total} issues...", err=True)


def _handle_client_errors(func):
    """Decorator that catches client and template exceptions and exits cleanly."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from jira_report.client import (
            AuthenticationError,
            JiraClientError,
            NetworkError,
            NotFoundError,
            PermissionDeniedError,
        )
        from jira_report.render import TemplateError

        try:
            return func(*args, **kwargs)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except PermissionDeniedError as exc:
            click.echo(f"Permission error: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except JiraClientError as exc:
            click.echo(f"Jira API error: {exc}", err=True)
            sys.exit(1)
        except TemplateError as exc:
            click.echo(f"Template error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group(invoke_without_command=True)
@click.option("--config", "config_path", default=None,
              help="Path to the configuration file [default: jira-report.yaml, if present].")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="jira-report")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Jira report tool — summarize your tickets into an HTML report."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    if ctx.invoked_subcommand is None:
        ctx.invoke(run_command)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@cli.command("run")
@click.pass_context
@_handle_client_errors
def run_command(ctx: click.Context) -> None:
    """Fetch all searches and write the JSON summary and the HTML report."""
    from jira_report.reports.pipeline import generate
    from jira_report.reports.queries import build_queries

    config, client = _make_client(ctx)

    if ctx.obj["verbose"]:
        for query in build_queries(config):
            click.echo(f"[verbose] {query.title}: {query.jql}", err=True)

    result = generate(config, client, progress=_echo_progress)

    click.echo(f"Summary written to '{result.summary_path}'", err=True)
    click.echo(f"Report generated: {result.report_path}")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="jira-report.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template jira-report.yaml file."""
    from jira_report.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your Jira URL, account email, API token and report settings.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
