"""runtimeprobe CLI - rprobe command."""

from pathlib import Path

import click

from runtimeprobe import __version__
from runtimeprobe.cli.current import current_command
from runtimeprobe.cli.emit import emit_command
from runtimeprobe.cli.installations import inspect_command
from runtimeprobe.config.loader import load_config
from runtimeprobe.core.errors import ConfigError
from runtimeprobe.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="rprobe")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (overrides ~/.config/runtimeprobe/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """runtimeprobe - identify runtime installations without running inside them."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    ctx.obj["config"] = config


cli.add_command(inspect_command, name="inspect")
cli.add_command(current_command, name="current")
cli.add_command(emit_command, name="emit")


if __name__ == "__main__":
    cli()
