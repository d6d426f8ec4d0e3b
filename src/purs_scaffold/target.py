"""Target-directory resolution and safety checks."""

from __future__ import annotations

import stat
from pathlib import Path

from purs_scaffold.errors import ProvisioningFailed, TargetNotDirectory, TargetNotEmpty


def resolve_target(target: str | Path, cwd: Path) -> Path:
    """Resolve *target* against the invocation's working directory."""
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = cwd / path
    return path.resolve()


def validate_target(target: Path) -> None:
    """Check that *target* is absent or an empty directory.

    Read-only; must run before anything is written.

    Raises:
        TargetNotEmpty: The directory already has at least one entry.
        TargetNotDirectory: The path, or one of its parents, exists and is
            not a directory.
        ProvisioningFailed: The target could not be inspected at all.
    """
    try:
        mode = target.stat().st_mode
    except FileNotFoundError:
        # Created later by the materializer.
        return
    except NotADirectoryError:
        raise TargetNotDirectory(str(target)) from None
    except OSError as exc:
        raise ProvisioningFailed(
            f"Cannot inspect target {target}: {exc.strerror or exc}", target=str(target)
        ) from exc

    if not stat.S_ISDIR(mode):
        raise TargetNotDirectory(str(target))
    try:
        for _ in target.iterdir():
            raise TargetNotEmpty(str(target))
    except OSError as exc:
        raise ProvisioningFailed(
            f"Cannot list target {target}: {exc.strerror or exc}", target=str(target)
        ) from exc
