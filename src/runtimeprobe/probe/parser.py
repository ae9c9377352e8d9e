"""Result parser: raw probe output to a total metadata mapping."""

from __future__ import annotations

import os

import structlog

from runtimeprobe.core.errors import ProbeParseError
from runtimeprobe.probe.schema import Metadata, PropertySchema, unknown_metadata

logger = structlog.get_logger()


def decode_probe_output(
    stdout: str,
    schema: PropertySchema,
    *,
    line_separator: str = os.linesep,
) -> Metadata:
    """Assign output lines positionally to the schema's properties.

    One trailing separator is dropped first (the probe terminates its last value
    with one). Empty lines, including a final one, are values. Lines beyond the
    schema length are ignored.

    Raises:
        ProbeParseError: Fewer lines than properties.
    """
    lines = stdout.removesuffix(line_separator).split(line_separator)
    if len(lines) < len(schema):
        raise ProbeParseError.truncated_output(len(schema), len(lines))
    return {kind: lines[position] for position, kind in enumerate(schema.kinds)}


def parse_probe_output(
    exit_code: int,
    stdout: str,
    schema: PropertySchema,
    *,
    line_separator: str = os.linesep,
) -> Metadata:
    """Turn a probe outcome into metadata. Never raises for bad probes.

    A non-zero exit or malformed output yields the all-"unknown" mapping.
    """
    if exit_code != 0:
        logger.info("probe_exit_nonzero", target=schema.target, exit_code=exit_code)
        return unknown_metadata()
    try:
        return decode_probe_output(stdout, schema, line_separator=line_separator)
    except ProbeParseError as e:
        logger.warning("probe_output_malformed", target=schema.target, **e.details)
        return unknown_metadata()
