"""Error taxonomy for template provisioning.

Every failure the engine can report derives from ``ScaffoldError`` so the CLI
can turn it into a one-line message and exit code 1. None of these are
retried; a failed run may leave a partially written target behind.
"""

from __future__ import annotations

from typing import Any


class ScaffoldError(Exception):
    """Base class for all provisioning failures."""

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)


class UsageError(ScaffoldError):
    """Bad command-line invocation. Raised before any filesystem action."""


class TargetNotEmpty(ScaffoldError):
    """The target exists, is a directory, and already has entries."""

    def __init__(self, target: str) -> None:
        super().__init__(f'Target directory "{target}" exists and is not empty.', target=target)


class TargetNotDirectory(ScaffoldError):
    """The target exists but is a file (or something else that is not a directory)."""

    def __init__(self, target: str) -> None:
        super().__init__(f'Target "{target}" exists and is not a directory.', target=target)


class ManifestNotFound(ScaffoldError):
    """No usable manifest for the requested template."""

    def __init__(self, template: str, message: str | None = None) -> None:
        super().__init__(
            message or f"template.manifest not found for template: {template}",
            template=template,
        )


class DownloadFailed(ScaffoldError):
    """Fetching a template archive failed.

    ``status_code`` is ``None`` when the request never produced a response.
    """

    def __init__(self, url: str, status_code: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        if status_code is None:
            message = f"Failed to download {url}: {reason}"
        else:
            message = f"Failed to download {url}: {status_code} {reason}".rstrip()
        super().__init__(message, url=url, status_code=status_code)


class ProvisioningFailed(ScaffoldError):
    """Copying or extracting template files into the target failed."""


class BuildFailed(ScaffoldError):
    """A post-provision build command exited non-zero (strict builds only)."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Build command failed (exit {returncode}): {command}",
            command=command,
            returncode=returncode,
        )
