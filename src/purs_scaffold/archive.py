"""Template archives.

``extract_archive`` is the unzip facility used by remote provisioning.
``pack_template``/``pack_all``/``clean_archives`` are the maintainer side:
they build the ``templates/<name>.zip`` files that get published next to the
engine, from the same manifests the local materializer reads.
"""

from __future__ import annotations

import zipfile
from pathlib import Path

from purs_scaffold.errors import ManifestNotFound, ProvisioningFailed
from purs_scaffold.manifest import MANIFEST_NAME, expand_entries, load_manifest
from purs_scaffold.utils import console


def extract_archive(archive: Path, dest: Path) -> list[str]:
    """Unpack every entry of *archive* into *dest*, overwriting existing files.

    Returns:
        The archive member names, in archive order.

    Raises:
        ProvisioningFailed: The file is not a valid zip or an entry could not
            be written. The underlying error message is kept verbatim.
    """
    try:
        with zipfile.ZipFile(archive) as zf:
            names = zf.namelist()
            zf.extractall(dest)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ProvisioningFailed(
            f"Failed to unzip template archive {archive.name}: {exc}",
            archive=str(archive),
        ) from exc
    return names


def pack_template(templates_dir: Path, name: str) -> Path:
    """Zip the manifest-listed files of template *name*.

    Any previous ``<templates_dir>/<name>.zip`` is replaced. Archive entries
    use the paths the files get in a generated project (``.template``
    suffixes stripped), so extracting the archive gives the same tree as a
    local copy.

    Raises:
        ManifestNotFound: The template has no manifest.
        ProvisioningFailed: A listed file is missing.
    """
    entries = load_manifest(templates_dir, name)
    template_root = templates_dir / name
    zip_path = templates_dir / f"{name}.zip"
    zip_path.unlink(missing_ok=True)

    members = expand_entries(template_root, entries)
    try:
        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for source, arcname in members:
                # Directory members are written as "<arcname>/" entries.
                zf.write(source, arcname)
    except OSError as exc:
        zip_path.unlink(missing_ok=True)
        raise ProvisioningFailed(
            f"Failed to pack template {name}: {exc}", template=name
        ) from exc

    console.print(f"[green]Created[/green] {zip_path.name} ({len(members)} entries)")
    return zip_path


def pack_all(templates_dir: Path) -> list[Path]:
    """Pack every template directory under *templates_dir*.

    Every subdirectory is treated as a template; one without a manifest is
    an error rather than being skipped silently.
    """
    created: list[Path] = []
    for child in sorted(templates_dir.iterdir()):
        if not child.is_dir():
            continue
        if not (child / MANIFEST_NAME).is_file():
            raise ManifestNotFound(child.name)
        created.append(pack_template(templates_dir, child.name))
    return created


def clean_archives(templates_dir: Path) -> list[Path]:
    """Remove all ``*.zip`` files from *templates_dir*."""
    removed: list[Path] = []
    for zip_path in sorted(templates_dir.glob("*.zip")):
        zip_path.unlink()
        removed.append(zip_path)
        console.print(f"Removed {zip_path.name}")
    if not removed:
        console.print("[dim]No template archives to remove[/dim]")
    return removed
