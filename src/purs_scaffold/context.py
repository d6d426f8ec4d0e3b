"""Execution-context resolution.

Where the engine's own code came from decides how templates are materialized:
a ``file://`` origin means the template store sits next to the code on disk,
anything else means the templates live as zip archives on the same web host.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit


class ExecutionContext(str, Enum):
    """Where the running engine was loaded from."""

    LOCAL = "local"
    REMOTE = "remote"


def default_origin() -> str:
    """Return the ``file://`` URI of this installed module."""
    return Path(__file__).resolve().as_uri()


def resolve_context(origin: str) -> ExecutionContext:
    """Classify an origin URL (or bare filesystem path).

    Examples::

        resolve_context("file:///opt/purs_scaffold/context.py") -> LOCAL
        resolve_context("/opt/purs_scaffold/context.py")        -> LOCAL
        resolve_context("https://example.org/create.py")         -> REMOTE
    """
    scheme = urlsplit(origin).scheme.lower()
    # Single-letter schemes are Windows drive letters ("C:\...").
    if scheme in ("", "file") or len(scheme) == 1:
        return ExecutionContext.LOCAL
    return ExecutionContext.REMOTE


def archive_url(origin: str, template: str) -> str:
    """Derive the archive URL for *template* from the engine's remote origin.

    The last path segment of the origin is replaced with
    ``templates/<template>.zip``; query and fragment are dropped.
    """
    parts = urlsplit(origin)
    root_path = parts.path.rsplit("/", 1)[0]
    return f"{parts.scheme}://{parts.netloc}{root_path}/templates/{template}.zip"
