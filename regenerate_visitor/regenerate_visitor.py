import json
import logging
import sys

import click

from .pipeline import RegenerateConfig, RegenerationError, VisitorRegenerator
from .pipeline.errors import ArgumentError


def load_config(config_path, antlr_jar=None):
    """Build the configuration from an optional JSON file and CLI overrides.

    Raises:
        ArgumentError: If the config file is not a valid JSON object
    """
    if config_path is not None:
        try:
            with open(config_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ArgumentError(f"Invalid config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ArgumentError(f"Invalid config file {config_path}: expected a JSON object, got {type(data).__name__}")
        config = RegenerateConfig.from_dict(data)
    else:
        config = RegenerateConfig()

    if antlr_jar:
        config.antlr_jar = antlr_jar

    return config


def setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def report_error(e):
    click.echo(f"{type(e).__name__}: {e}", err=True)
    sys.exit(1)


def echo_summary(summary):
    if summary is None:
        click.echo("No difference in stub bodies, merge skipped")
        return
    click.echo(f"Kept {len(summary.preserved)} existing stub bodies")
    for name in summary.adopted:
        click.echo(f"  added:   {name}")
    for name in summary.dropped:
        click.echo(f"  dropped: {name}")
    for line in summary.carried_imports:
        click.echo(f"  import:  {line.strip()}")


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--antlr-jar", default=None, type=str, help="Path of the ANTLR complete jar")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every step")
@click.argument("grammar", required=False, default=None, type=click.Path())
def regenerate_visitor(config, antlr_jar, verbose, grammar):
    """Regenerate the visitor of GRAMMAR, keeping hand-edited stub bodies."""
    setup_logging(verbose)
    try:
        regenerator = VisitorRegenerator(load_config(config, antlr_jar))
        result = regenerator.run(grammar)
    except RegenerationError as e:
        report_error(e)

    if result.summary is not None:
        echo_summary(result.summary)
    click.echo(f"{result.visitor_path}: {result.outcome.value}")


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every step")
@click.argument("old", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("new", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def merge_visitor(output, config, verbose, old, new):
    """Merge the stub bodies of OLD into NEW (or into --output)."""
    setup_logging(verbose)
    try:
        regenerator = VisitorRegenerator(load_config(config))
        summary = regenerator.merge_files(old, new, output)
    except RegenerationError as e:
        report_error(e)

    echo_summary(summary)
