"""rprobe inspect command - probe one or more runtime installations."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import click
import structlog

from runtimeprobe.cli.utils import fatal_error, print_metadata, resolve_probe_config
from runtimeprobe.config.models import RuntimeProbeConfig
from runtimeprobe.core.errors import RuntimeProbeError
from runtimeprobe.probe.emitters import available_targets
from runtimeprobe.probe.installation import InstallationProbe
from runtimeprobe.probe.schema import Metadata, metadata_to_dict

logger = structlog.get_logger()


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--target", type=click.Choice(available_targets()), help="Runtime family")
@click.option("--entrypoint", help="Executable name under <PATH>/bin")
@click.option(
    "--timeout", "timeout_sec", type=float, help="Probe timeout in seconds (0 waits forever)"
)
@click.option(
    "-j", "--jobs", type=click.IntRange(min=1), default=1, show_default=True,
    help="Installations to probe in parallel",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def inspect_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    target: str | None,
    entrypoint: str | None,
    timeout_sec: float | None,
    jobs: int,
    as_json: bool,
) -> None:
    """Report version, vendor and VM metadata of runtime installations.

    Each PATH is an installation root containing bin/<entrypoint>. Repeated
    paths are probed once. Installations that cannot be probed report "unknown".
    """
    config: RuntimeProbeConfig = ctx.obj["config"]
    probe_config = resolve_probe_config(
        config.probe, target=target, entrypoint=entrypoint, timeout_sec=timeout_sec or None
    )
    if timeout_sec == 0:
        probe_config = probe_config.model_copy(update={"timeout_sec": None})
    probe = InstallationProbe(probe_config)

    try:
        if jobs > 1:
            with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="rprobe") as pool:
                results: list[Metadata] = list(pool.map(probe.get_metadata, paths))
        else:
            results = [probe.get_metadata(path) for path in paths]
    except RuntimeProbeError as e:
        logger.error("inspect_failed", error=e.error_name, message=e.message, **e.details)
        raise fatal_error(e) from e

    if as_json:
        payload = {str(path): metadata_to_dict(metadata) for path, metadata in zip(paths, results)}
        click.echo(json.dumps(payload, indent=2))
        return

    for path, metadata in zip(paths, results):
        print_metadata(str(path), metadata)
