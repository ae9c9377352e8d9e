"""Tests for CLI utilities."""

from __future__ import annotations

import click
import pytest
from rich.console import Console

from runtimeprobe.cli.utils import make_metadata_table, resolve_probe_config
from runtimeprobe.config.models import ProbeConfig
from runtimeprobe.probe.schema import PropertyKind, unknown_metadata


def _render(table) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(table)
    return console.export_text()


class TestResolveProbeConfig:
    def test_none_overrides_keep_base(self) -> None:
        base = ProbeConfig(target="python", timeout_sec=5)

        resolved = resolve_probe_config(base, target=None, entrypoint=None, timeout_sec=None)

        assert resolved == base

    def test_given_overrides_win(self) -> None:
        resolved = resolve_probe_config(ProbeConfig(), target="python", timeout_sec=2.5)

        assert resolved.target == "python"
        assert resolved.timeout_sec == 2.5

    def test_invalid_override_raises_click_exception(self) -> None:
        with pytest.raises(click.ClickException, match="entrypoint"):
            resolve_probe_config(ProbeConfig(), entrypoint="bin/java")


class TestMakeMetadataTable:
    def test_lists_every_property(self) -> None:
        metadata = unknown_metadata()
        metadata[PropertyKind.VERSION] = "21"

        text = _render(make_metadata_table("/opt/jdk-21", metadata))

        assert "/opt/jdk-21" in text
        for kind in PropertyKind:
            assert kind.value in text
        assert "21" in text
        assert "unknown" in text

    def test_values_are_not_interpreted_as_markup(self) -> None:
        metadata = unknown_metadata()
        metadata[PropertyKind.VENDOR] = "[bold]Vendor[/bold]"

        text = _render(make_metadata_table("[red]title[/red]", metadata))

        assert "[bold]Vendor[/bold]" in text
        assert "[red]title[/red]" in text
