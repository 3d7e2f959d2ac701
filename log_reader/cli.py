from pathlib import Path

import click

from core.aggregator import aggregate_text
from core.table_renderer import write_report
from infra.config_loader import load_config
from infra.file_reader import read_log_file
from infra.logging_config import get_logger, setup_logging
from log_reader import __version__

logger = get_logger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", metavar="INPUT")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level (DEBUG shows unparseable lines)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (defaults to config/default.yml)",
)
@click.version_option(__version__, prog_name="log-reader")
@click.pass_context
def cli(ctx: click.Context, input_path: str, log_level: str | None, config_path: Path | None) -> None:
    """Reads a logfile and outputs per-type byte-counts"""
    config = load_config(config_path)
    setup_logging(level=log_level or config.logging.level, fmt=config.logging.format)

    contents = read_log_file(input_path)
    if contents.is_err():
        logger.error("%s", contents.error)
        ctx.exit(1)

    result = aggregate_text(contents.value, logger)
    logger.info(
        "Processed %s",
        input_path,
        extra={"extra_data": {"lines": result.total_lines, "types": result.type_count}},
    )
    write_report(result, click.echo)


if __name__ == "__main__":
    cli()
