"""Local materializer: copy manifest-listed files from the template store."""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from pathlib import Path

from purs_scaffold.context import ExecutionContext
from purs_scaffold.errors import ProvisioningFailed
from purs_scaffold.manifest import expand_entries, load_manifest
from purs_scaffold.utils import console


def _copy_file_atomic(source: Path, destination: Path) -> None:
    """Copy *source* over *destination* via a temporary sibling + rename."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".part", dir=destination.parent
    )
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        shutil.copyfile(source, tmp_path)
        shutil.copymode(source, tmp_path)
        os.replace(tmp_path, destination)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class FileSource:
    """Copies templates out of a directory on the local filesystem.

    Each template lives in ``<templates_dir>/<name>/`` next to its
    ``template.manifest``. Files are copied concurrently, at most
    ``max_parallel`` at a time.
    """

    context = ExecutionContext.LOCAL

    def __init__(self, templates_dir: Path, max_parallel: int = 8) -> None:
        self.templates_dir = Path(templates_dir)
        self.max_parallel = max_parallel

    async def materialize(self, template: str, target: Path) -> list[str]:
        entries = load_manifest(self.templates_dir, template)
        template_root = self.templates_dir / template
        pairs = expand_entries(template_root, entries)

        console.print(
            f"[cyan]Copying[/cyan] template [bold]{template}[/bold] "
            f"({len(entries)} manifest entries) from {template_root}"
        )

        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise ProvisioningFailed(
                f"Failed to create {target}: {exc.strerror or exc}", template=template
            ) from exc

        semaphore = asyncio.Semaphore(self.max_parallel)

        async def _copy(source: Path, rel: str) -> None:
            destination = target / rel
            async with semaphore:
                try:
                    if source.is_dir():
                        await asyncio.to_thread(destination.mkdir, parents=True, exist_ok=True)
                    else:
                        await asyncio.to_thread(_copy_file_atomic, source, destination)
                except OSError as exc:
                    raise ProvisioningFailed(
                        f"Failed to copy {source.relative_to(template_root).as_posix()} "
                        f"to {destination}: {exc.strerror or exc}",
                        template=template,
                        entry=rel,
                    ) from exc

        results = await asyncio.gather(
            *(_copy(source, rel) for source, rel in pairs), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return [rel for _, rel in pairs]
