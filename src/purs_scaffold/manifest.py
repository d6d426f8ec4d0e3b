"""Template manifests.

A manifest is ``template.manifest`` in the template root: one relative path
per line, blank lines ignored, no comments. Entries may name directories.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from purs_scaffold.errors import ManifestNotFound

MANIFEST_NAME = "template.manifest"

# Template files that would otherwise be picked up as live project files
# (TypeScript modules, dotfiles) are stored with this suffix.
TEMPLATE_SUFFIX = ".template"


def parse_manifest(text: str) -> list[str]:
    """Split manifest text into trimmed, non-empty entries, preserving order."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _check_entry(template: str, entry: str) -> None:
    path = PurePosixPath(entry)
    if path.is_absolute() or ".." in path.parts:
        raise ManifestNotFound(
            template,
            f"Invalid manifest for template {template}: "
            f"entry {entry!r} is not relative to the template root",
        )


def load_manifest(templates_dir: Path, template: str) -> list[str]:
    """Read the manifest of *template* from a local template store.

    Raises:
        ManifestNotFound: If the manifest is missing or lists a path that
            escapes the template root.
    """
    manifest_path = templates_dir / template / MANIFEST_NAME
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        raise ManifestNotFound(template) from None

    entries = parse_manifest(text)
    for entry in entries:
        _check_entry(template, entry)
    return entries


def destination_path(entry: str) -> str:
    """Map a stored template path to the path it gets in a new project.

    Examples::

        destination_path("serve.ts.template")   -> "serve.ts"
        destination_path(".gitignore.template") -> ".gitignore"
        destination_path("spago.yaml")          -> "spago.yaml"
    """
    if entry.endswith(TEMPLATE_SUFFIX):
        return entry[: -len(TEMPLATE_SUFFIX)]
    return entry


def expand_entries(template_root: Path, entries: list[str]) -> list[tuple[Path, str]]:
    """Expand manifest entries into ``(source, destination)`` pairs.

    Directory entries are walked recursively; the directory itself is listed
    before its contents so empty directories survive. Destinations are
    relative POSIX paths with ``.template`` suffixes stripped. Missing
    sources are passed through and fail when read.
    """
    pairs: list[tuple[Path, str]] = []
    for entry in entries:
        source = template_root / entry
        pairs.append((source, destination_path(entry.rstrip("/"))))
        if source.is_dir():
            for child in sorted(source.rglob("*")):
                rel = child.relative_to(template_root).as_posix()
                pairs.append((child, destination_path(rel)))
    return pairs


def list_templates(templates_dir: Path) -> list[str]:
    """Names of all templates in a local store (directories with a manifest)."""
    if not templates_dir.is_dir():
        return []
    return sorted(
        child.name
        for child in templates_dir.iterdir()
        if child.is_dir() and (child / MANIFEST_NAME).is_file()
    )
