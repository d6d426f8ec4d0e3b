"""Shared pytest fixtures for the purs-scaffold test suite.

Provides reusable fixtures for:
- A small on-disk template store
- Engine configuration pointing at that store
- Mock httpx clients serving template archives
- Mock subprocess helpers
"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from purs_scaffold.config import ScaffoldConfig


REMOTE_ORIGIN = "https://templates.example.org/purs/create_purs_project.py"


# ---------------------------------------------------------------------------
# Template store
# ---------------------------------------------------------------------------

DEMO_FILES: dict[str, bytes] = {
    "src/Main.purs": b"module Main where\n\nimport Prelude\n",
    "test/Test/Main.purs": b"module Test.Main where\n",
    "package.json": b'{\n  "name": "demo"\n}\n',
    "serve.ts.template": b"Deno.serve(() => new Response('ok'));\n",
    ".gitignore.template": b"/output/\n/node_modules/\n",
    "assets/logo.svg": b"<svg xmlns='http://www.w3.org/2000/svg'/>\n",
    "assets/fonts/mono.txt": b"\x00\x01binary\xff",
}

DEMO_MANIFEST = """src/Main.purs
test/Test/Main.purs

package.json
  serve.ts.template
.gitignore.template
assets
"""

# What a project created from the demo template contains (files only).
DEMO_EXPECTED: dict[str, bytes] = {
    "src/Main.purs": DEMO_FILES["src/Main.purs"],
    "test/Test/Main.purs": DEMO_FILES["test/Test/Main.purs"],
    "package.json": DEMO_FILES["package.json"],
    "serve.ts": DEMO_FILES["serve.ts.template"],
    ".gitignore": DEMO_FILES[".gitignore.template"],
    "assets/logo.svg": DEMO_FILES["assets/logo.svg"],
    "assets/fonts/mono.txt": DEMO_FILES["assets/fonts/mono.txt"],
}


def tree_files(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative POSIX path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def template_store(tmp_path: Path) -> Path:
    """A template store with a full ``demo`` template and a two-file ``minimal`` one."""
    store = tmp_path / "templates"
    demo = store / "demo"
    for rel, data in DEMO_FILES.items():
        path = demo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    (demo / "template.manifest").write_text(DEMO_MANIFEST, encoding="utf-8")

    minimal = store / "minimal"
    (minimal / "src").mkdir(parents=True)
    (minimal / "src" / "Main.purs").write_text("module Main where\n", encoding="utf-8")
    (minimal / "package.json").write_text("{}\n", encoding="utf-8")
    (minimal / "template.manifest").write_text("src/Main.purs\npackage.json\n", encoding="utf-8")
    return store


@pytest.fixture
def local_config(template_store: Path) -> ScaffoldConfig:
    """Engine configuration that resolves to the local file source."""
    return ScaffoldConfig(
        templates_dir=template_store,
        origin=(template_store.parent / "create_purs_project.py").as_uri(),
    )


@pytest.fixture
def remote_config(template_store: Path) -> ScaffoldConfig:
    """Engine configuration that resolves to the HTTP source."""
    return ScaffoldConfig(templates_dir=template_store, origin=REMOTE_ORIGIN)


# ---------------------------------------------------------------------------
# Archives & HTTP
# ---------------------------------------------------------------------------


def make_zip(files: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return buffer.getvalue()


def make_response(status_code: int = 200, content: bytes = b"", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.reason_phrase = reason
    return response


@pytest.fixture
def mock_http():
    """Factory for a mock ``httpx.AsyncClient`` whose ``get`` returns *response*.

    Usage:
        def test_download(mock_http):
            client = mock_http(make_response(200, b"..."))
            with patch("httpx.AsyncClient", return_value=client):
                ...
    """

    def factory(response: MagicMock | None = None, side_effect: Exception | None = None) -> AsyncMock:
        client = AsyncMock()
        if side_effect is not None:
            client.get = AsyncMock(side_effect=side_effect)
        else:
            client.get = AsyncMock(return_value=response)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        return client

    return factory


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
