"""Scoped temporary workspace for a single probe run."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from runtimeprobe.config.constants import WORKSPACE_PREFIX_DEFAULT
from runtimeprobe.core.errors import WorkspaceError

logger = structlog.get_logger()


@contextmanager
def scoped_workspace(
    prefix: str = WORKSPACE_PREFIX_DEFAULT,
    root: Path | None = None,
) -> Iterator[Path]:
    """Create an empty directory and delete it, recursively, on every exit path.

    Raises:
        WorkspaceError: If the directory cannot be created or removed. A removal
            failure replaces any exception raised inside the block.
    """
    try:
        workspace = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    except OSError as e:
        location = str(root) if root is not None else tempfile.gettempdir()
        raise WorkspaceError.create_failed(location, str(e)) from e

    logger.debug("workspace_created", path=str(workspace))
    try:
        yield workspace
    finally:
        try:
            shutil.rmtree(workspace)
        except OSError as e:
            logger.error("workspace_cleanup_failed", path=str(workspace), error=str(e))
            raise WorkspaceError.cleanup_failed(str(workspace), str(e)) from e
