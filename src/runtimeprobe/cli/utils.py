"""CLI utilities."""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from runtimeprobe.config.constants import UNKNOWN
from runtimeprobe.config.models import ProbeConfig
from runtimeprobe.core.errors import RuntimeProbeError
from runtimeprobe.core.logging import get_log_file_path
from runtimeprobe.probe.schema import Metadata, PropertyKind


def resolve_probe_config(base: ProbeConfig, **overrides: Any) -> ProbeConfig:
    """Apply command-line overrides (None means "not given") to the loaded config.

    Raises:
        click.ClickException: If an override fails validation
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ProbeConfig.model_validate({**base.model_dump(), **updates})
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise click.ClickException(f"Invalid value for '{field}': {err['msg']}") from e


def make_metadata_table(title: str, metadata: Metadata) -> Table:
    table = Table(title=escape(title), show_header=False, title_justify="left", pad_edge=False)
    table.add_column("property", style="cyan", no_wrap=True)
    table.add_column("value")
    for kind in PropertyKind:
        value = metadata[kind]
        table.add_row(kind.value, escape(value) if value != UNKNOWN else f"[dim]{UNKNOWN}[/dim]")
    return table


def print_metadata(title: str, metadata: Metadata) -> None:
    Console().print(make_metadata_table(title, metadata))


def fatal_error(error: RuntimeProbeError) -> click.ClickException:
    """Wrap a fatal error for the CLI, pointing at the log file when one is configured."""
    log_file = get_log_file_path()
    if log_file:
        return click.ClickException(f"{error}. See {log_file} for details.")
    return click.ClickException(str(error))
