"""Post-provision build: dependency install followed by the project build."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from purs_scaffold.config import BuildConfig
from purs_scaffold.errors import BuildFailed
from purs_scaffold.utils import console, print_warning, run_command


@dataclass
class CommandResult:
    """Outcome of one build command."""

    command: str
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_build(target: Path, config: BuildConfig) -> list[CommandResult]:
    """Run the install and build commands in *target*, one after the other.

    Command output goes straight to the terminal.

    A non-zero exit is reported as a warning. With ``config.strict`` it
    raises ``BuildFailed`` instead and the build command is not attempted
    after a failed install.
    """
    console.print("[cyan]Building project...[/cyan]")
    results: list[CommandResult] = []

    for cmd in (config.install_command, config.build_command):
        cmd_str = " ".join(cmd)
        returncode, _, stderr = await run_command(
            cmd, cwd=target, timeout=config.timeout, capture=False
        )
        result = CommandResult(command=cmd_str, returncode=returncode, stderr=stderr)
        results.append(result)

        if not result.ok:
            if config.strict:
                raise BuildFailed(cmd_str, returncode, stderr)
            detail = f": {stderr}" if stderr else ""
            print_warning(f"'{cmd_str}' exited with code {returncode}{detail}")

    if all(r.ok for r in results):
        console.print("[green]Project built successfully.[/green]")
    else:
        console.print("[yellow]Build finished with errors.[/yellow]")
    return results
