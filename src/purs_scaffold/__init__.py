"""purs-scaffold -- create PureScript-on-Deno projects from templates.

Quick usage::

    from purs_scaffold import ProvisionOptions, provision

    result = await provision("my-app", ProvisionOptions(template="cli", build=True))
    print(result.files)
"""

from purs_scaffold.config import BuildConfig, ProvisionOptions, ScaffoldConfig
from purs_scaffold.context import ExecutionContext, resolve_context
from purs_scaffold.engine import ProvisionResult, Provisioner, provision
from purs_scaffold.errors import (
    BuildFailed,
    DownloadFailed,
    ManifestNotFound,
    ProvisioningFailed,
    ScaffoldError,
    TargetNotDirectory,
    TargetNotEmpty,
    UsageError,
)
from purs_scaffold.sources import FileSource, HttpSource, TemplateSource

__all__ = [
    "BuildConfig",
    "BuildFailed",
    "DownloadFailed",
    "ExecutionContext",
    "FileSource",
    "HttpSource",
    "ManifestNotFound",
    "ProvisionOptions",
    "ProvisionResult",
    "ProvisioningFailed",
    "Provisioner",
    "ScaffoldConfig",
    "ScaffoldError",
    "TargetNotDirectory",
    "TargetNotEmpty",
    "TemplateSource",
    "UsageError",
    "provision",
    "resolve_context",
]
