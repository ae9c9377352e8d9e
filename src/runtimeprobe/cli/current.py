"""rprobe current command - metadata of the running interpreter."""

import json
import sys

import click

from runtimeprobe.cli.utils import print_metadata
from runtimeprobe.probe.introspection import current
from runtimeprobe.probe.schema import metadata_to_dict


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def current_command(as_json: bool) -> None:
    """Show metadata of the Python interpreter running rprobe."""
    metadata = current()
    if as_json:
        click.echo(json.dumps(metadata_to_dict(metadata), indent=2))
        return
    print_metadata(sys.executable, metadata)
