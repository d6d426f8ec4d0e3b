"""Template provisioning engine.

Validates the target, picks a template source from the execution context,
materializes the template and optionally runs the build. All process-level
state (working directory, engine origin) is passed in by the caller.

Typical usage::

    config = ScaffoldConfig.from_env()
    provisioner = Provisioner(config, cwd=Path.cwd())
    result = await provisioner.provision("my-app", ProvisionOptions(template="cli"))
"""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel, Field

from purs_scaffold.build import CommandResult, run_build
from purs_scaffold.config import ProvisionOptions, ScaffoldConfig
from purs_scaffold.context import ExecutionContext, resolve_context
from purs_scaffold.sources import TemplateSource, select_source
from purs_scaffold.target import resolve_target, validate_target
from purs_scaffold.utils import console


class ProvisionResult(BaseModel):
    """What a provisioning run produced."""

    template: str
    target: Path
    context: ExecutionContext
    files: list[str] = Field(default_factory=list)
    built: bool = False
    build_ok: bool = True
    duration_s: float = 0.0


class Provisioner:
    """Runs one provisioning operation at a time.

    Args:
        config: Engine configuration (template store, origin, build commands).
        cwd: Working directory relative targets are resolved against.
        source: Explicit template source; chosen from ``config.origin`` when
            omitted.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        cwd: Path,
        source: TemplateSource | None = None,
    ) -> None:
        self.config = config
        self.cwd = cwd
        self.context = source.context if source is not None else resolve_context(config.origin)
        self.source = source or select_source(self.context, config)

    async def provision(
        self,
        target: str | Path,
        options: ProvisionOptions | None = None,
    ) -> ProvisionResult:
        """Create a new project from a template in *target*.

        Raises:
            TargetNotEmpty, TargetNotDirectory: Before anything is written.
            ManifestNotFound, DownloadFailed, ProvisioningFailed: The target
                may be left partially populated.
            BuildFailed: Only with a strict build configuration.
        """
        opts = options or ProvisionOptions()
        started = time.monotonic()

        target_path = resolve_target(target, self.cwd)
        validate_target(target_path)

        console.print(
            f"[bold]Creating[/bold] {target_path} from template [bold]{opts.template}[/bold] "
            f"({self.context.value} source)"
        )

        files = await self.source.materialize(opts.template, target_path)

        build_results: list[CommandResult] = []
        if opts.build:
            build_results = await run_build(target_path, self.config.build)

        return ProvisionResult(
            template=opts.template,
            target=target_path,
            context=self.context,
            files=files,
            built=opts.build,
            build_ok=all(r.ok for r in build_results),
            duration_s=time.monotonic() - started,
        )


async def provision(
    target: str | Path,
    options: ProvisionOptions | None = None,
    config: ScaffoldConfig | None = None,
    cwd: Path | None = None,
) -> ProvisionResult:
    """Convenience wrapper around ``Provisioner.provision``."""
    provisioner = Provisioner(config or ScaffoldConfig(), cwd=cwd or Path.cwd())
    return await provisioner.provision(target, options)
