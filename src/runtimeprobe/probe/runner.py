"""Process runner: deploys a probe program and executes it inside an installation.

Exit status is data, not an error. A non-zero exit, a launch failure, or a
timeout all come back as a ProbeExecution for the parser to judge.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

from runtimeprobe.core.errors import WorkspaceError
from runtimeprobe.probe.emitters import ProbeProgram

logger = structlog.get_logger()

LAUNCH_FAILED_EXIT_CODE = -1


@dataclass(frozen=True)
class ProbeExecution:
    """Outcome of one probe process."""

    exit_code: int
    stdout: str
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def write_program(workspace: Path, program: ProbeProgram) -> Path:
    """Write the program into the workspace, raising WorkspaceError on failure."""
    program_path = workspace / program.file_name
    try:
        program_path.write_bytes(program.content)
    except OSError as e:
        raise WorkspaceError.write_failed(str(program_path), str(e)) from e
    return program_path


def run_probe(
    executable: Path,
    workspace: Path,
    program: ProbeProgram,
    *,
    timeout_sec: float | None = None,
) -> ProbeExecution:
    """Run ``program`` with ``executable`` from inside ``workspace``.

    Args:
        executable: Entry point of the target installation (e.g. <home>/bin/java)
        workspace: Exclusively owned directory used as cwd and deployment location
        program: Emitted probe program
        timeout_sec: Kill the process after this many seconds. None waits forever.

    Returns:
        ProbeExecution with the raw exit code and UTF-8 decoded output.
    """
    write_program(workspace, program)
    cmd = [str(executable), *program.arguments]
    logger.debug("probe_started", cmd=cmd, cwd=str(workspace))

    try:
        result = subprocess.run(
            cmd,
            cwd=workspace,
            capture_output=True,
            timeout=timeout_sec,
            env={**os.environ, **program.environment},
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning("probe_timed_out", executable=str(executable), timeout_sec=timeout_sec)
        return ProbeExecution(
            exit_code=LAUNCH_FAILED_EXIT_CODE,
            stdout="",
            stderr=f"Probe timed out after {timeout_sec}s",
        )
    except OSError as e:
        logger.warning("probe_launch_failed", executable=str(executable), error=str(e))
        return ProbeExecution(exit_code=LAUNCH_FAILED_EXIT_CODE, stdout="", stderr=str(e))

    execution = ProbeExecution(
        exit_code=result.returncode,
        stdout=result.stdout.decode("utf-8", errors="replace"),
        stderr=result.stderr.decode("utf-8", errors="replace"),
    )
    logger.debug("probe_finished", executable=str(executable), exit_code=execution.exit_code)
    return execution
