"""Remote materializer: download ``templates/<name>.zip`` and unpack it."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx

from purs_scaffold.archive import extract_archive
from purs_scaffold.context import ExecutionContext, archive_url
from purs_scaffold.errors import DownloadFailed, ProvisioningFailed
from purs_scaffold.utils import console, print_warning


class HttpSource:
    """Fetches template archives from the web host the engine was loaded from.

    The archive for template ``name`` is expected at
    ``<origin directory>/templates/<name>.zip``. Steps run strictly in order:
    download, write to ``<target>/<name>.zip``, extract, remove the archive.
    """

    context = ExecutionContext.REMOTE

    def __init__(self, origin: str) -> None:
        self.origin = origin

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient``; no timeout is applied to the fetch."""
        return httpx.AsyncClient(timeout=None, follow_redirects=True)

    async def download(self, template: str) -> bytes:
        """Fetch the archive bytes for *template*.

        Raises:
            DownloadFailed: Non-2xx response or transport error.
        """
        url = archive_url(self.origin, template)
        console.print(f"[cyan]Downloading[/cyan] {url}")
        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise DownloadFailed(url, reason=str(exc) or type(exc).__name__) from exc

        if not 200 <= response.status_code < 300:
            raise DownloadFailed(url, response.status_code, response.reason_phrase)
        return response.content

    async def materialize(self, template: str, target: Path) -> list[str]:
        data = await self.download(template)

        archive_path = target / f"{template}.zip"
        try:
            try:
                await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
                await asyncio.to_thread(archive_path.write_bytes, data)
            except OSError as exc:
                raise ProvisioningFailed(
                    f"Failed to write template archive {archive_path}: {exc.strerror or exc}",
                    template=template,
                ) from exc
            names = await asyncio.to_thread(extract_archive, archive_path, target)
        finally:
            try:
                archive_path.unlink(missing_ok=True)
            except OSError as exc:
                print_warning(f"Could not remove temporary archive {archive_path}: {exc}")
        return [name.rstrip("/") for name in names]
