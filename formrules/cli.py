"""CLI entrypoint for formrules."""

import logging
import sys
from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(__version__, prog_name="formrules")
@click.option("--verbose", is_flag=True, help="Log rule registration and evaluation to stderr")
def cli(verbose: bool) -> None:
    """formrules - Check form state against declarative validation rules."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("ruleset", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("state", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output the validation result as JSON",
)
def check(ruleset: Path, state: Path, output_json: bool) -> None:
    """Validate a form STATE file (JSON or YAML) against a RULESET (TOML).

    Exits with 1 when any field is invalid.

    Examples:

        formrules check signup.toml submitted.json

        formrules check signup.toml draft.yaml --json
    """
    from .commands.check import run_check

    exit_code = run_check(ruleset, state, output_json=output_json)
    sys.exit(exit_code)


@cli.command()
@click.argument("ruleset", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output templates as JSON")
def templates(ruleset: Path | None, output_json: bool) -> None:
    """List rule templates (global, plus those defined by RULESET)."""
    from .commands.check import run_templates

    exit_code = run_templates(ruleset, output_json=output_json)
    sys.exit(exit_code)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
