"""rprobe emit command - write a probe program to disk."""

from __future__ import annotations

from pathlib import Path

import click

from runtimeprobe.probe.emitters import available_targets, get_emitter


@click.command()
@click.argument(
    "output_dir", type=click.Path(file_okay=False, writable=True, path_type=Path)
)
@click.option(
    "--target", type=click.Choice(available_targets()), default="jvm", show_default=True,
    help="Runtime family",
)
def emit_command(output_dir: Path, target: str) -> None:
    """Write the probe program for TARGET into OUTPUT_DIR.

    Useful for running a probe by hand, e.g. `java -classpath OUTPUT_DIR JavaProbe`.
    """
    program = get_emitter(target).emit()
    output_dir.mkdir(parents=True, exist_ok=True)
    destination = output_dir / program.file_name
    try:
        destination.write_bytes(program.content)
    except OSError as e:
        raise click.ClickException(f"Unable to write {destination}: {e}") from e
    click.echo(f"Wrote {destination} ({len(program.content)} bytes)")
