"""Installation probe: memoized metadata lookup for runtime installations."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import structlog

from runtimeprobe.config.constants import INSTALLATION_BIN_DIR
from runtimeprobe.config.models import ProbeConfig
from runtimeprobe.core.logging import clear_probe_run_id, set_probe_run_id
from runtimeprobe.probe import introspection
from runtimeprobe.probe.cache import InstallationCache
from runtimeprobe.probe.emitters import ProbeEmitter, ProbeProgram, get_emitter
from runtimeprobe.probe.parser import parse_probe_output
from runtimeprobe.probe.runner import ProbeExecution, run_probe
from runtimeprobe.probe.schema import Metadata, PropertySchema
from runtimeprobe.probe.workspace import scoped_workspace

logger = structlog.get_logger()

ProbeRunner = Callable[..., ProbeExecution]


class InstallationProbe:
    """Determines identifying metadata of runtime installations by path.

    Construct one per tool session and share it; every distinct installation path
    is probed at most once for the probe's lifetime. Non-zero exits and malformed
    output are cached as the all-"unknown" mapping. Workspace failures propagate
    as WorkspaceError and leave nothing cached, so a later call retries.
    """

    def __init__(
        self,
        config: ProbeConfig | None = None,
        *,
        emitter: ProbeEmitter | None = None,
        runner: ProbeRunner = run_probe,
    ) -> None:
        self._config = config or ProbeConfig()
        self._emitter = emitter or get_emitter(self._config.target)
        self._runner = runner
        self._program = self._emitter.emit()
        self._cache = InstallationCache(self._probe)

    @property
    def config(self) -> ProbeConfig:
        return self._config

    @property
    def schema(self) -> PropertySchema:
        return self._emitter.schema

    @property
    def cache(self) -> InstallationCache:
        return self._cache

    @property
    def program(self) -> ProbeProgram:
        """Probe program for this target; emitted once, reused for every path."""
        return self._program

    @staticmethod
    def current() -> Metadata:
        """Metadata of the interpreter running this code."""
        return introspection.current()

    def get_metadata(self, installation: Path | str) -> Metadata:
        """Return metadata for the installation rooted at ``installation``."""
        return self._cache.get(installation)

    def executable_for(self, installation: Path) -> Path:
        entrypoint = self._config.entrypoint or self._emitter.default_entrypoint
        if os.name == "nt" and not entrypoint.lower().endswith(".exe"):
            entrypoint += ".exe"
        return installation / INSTALLATION_BIN_DIR / entrypoint

    def _probe(self, installation: Path) -> Metadata:
        executable = self.executable_for(installation)
        root = Path(self._config.workspace_root) if self._config.workspace_root else None
        set_probe_run_id()
        try:
            logger.info("installation_probe_started", installation=str(installation))
            with scoped_workspace(self._config.workspace_prefix, root) as workspace:
                execution = self._runner(
                    executable,
                    workspace,
                    self.program,
                    timeout_sec=self._config.timeout_sec,
                )
            metadata = parse_probe_output(execution.exit_code, execution.stdout, self.schema)
            logger.info(
                "installation_probe_finished",
                installation=str(installation),
                exit_code=execution.exit_code,
            )
            return metadata
        finally:
            clear_probe_run_id()
