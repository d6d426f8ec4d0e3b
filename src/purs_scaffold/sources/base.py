"""The template-source interface shared by local and remote materializers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from purs_scaffold.context import ExecutionContext


class TemplateSource(Protocol):
    """Writes the files of a named template into a target directory."""

    context: ExecutionContext

    async def materialize(self, template: str, target: Path) -> list[str]:
        """Populate *target* with *template*.

        The target has already been validated as absent or empty.

        Returns:
            Relative paths written into the target.
        """
        ...
