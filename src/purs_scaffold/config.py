"""purs-scaffold configuration.

Typed settings for the provisioning engine. Everything ambient (template
store location, engine origin, build commands) is collected here once at the
entry point and handed to the engine explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from purs_scaffold.context import default_origin

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_TRUTHY = ("1", "true", "yes", "on")


class ProvisionOptions(BaseModel):
    """Options passed through unchanged from the command line."""

    template: str = Field(default="server", description="Name of the template to use")
    build: bool = Field(default=False, description="Run install + build after provisioning")


class BuildConfig(BaseModel):
    """Commands run by the post-provision build step."""

    install_command: list[str] = Field(default_factory=lambda: ["npm", "install"])
    build_command: list[str] = Field(default_factory=lambda: ["npm", "run", "build"])
    timeout: int = Field(default=600, ge=10, description="Per-command timeout in seconds")
    strict: bool = Field(
        default=False,
        description="Raise BuildFailed on a non-zero exit instead of only warning",
    )


class ScaffoldConfig(BaseModel):
    """Global engine configuration."""

    templates_dir: Path = Field(default=DEFAULT_TEMPLATES_DIR)
    origin: str = Field(default_factory=default_origin)
    max_parallel_copies: int = Field(default=8, ge=1)
    build: BuildConfig = Field(default_factory=BuildConfig)

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            PURS_SCAFFOLD_TEMPLATES_DIR, PURS_SCAFFOLD_ORIGIN,
            PURS_SCAFFOLD_MAX_PARALLEL_COPIES, PURS_SCAFFOLD_BUILD_TIMEOUT,
            PURS_SCAFFOLD_STRICT_BUILD.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PURS_SCAFFOLD_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["PURS_SCAFFOLD_TEMPLATES_DIR"])
        if os.environ.get("PURS_SCAFFOLD_ORIGIN"):
            kwargs["origin"] = os.environ["PURS_SCAFFOLD_ORIGIN"]
        if os.environ.get("PURS_SCAFFOLD_MAX_PARALLEL_COPIES"):
            kwargs["max_parallel_copies"] = int(os.environ["PURS_SCAFFOLD_MAX_PARALLEL_COPIES"])

        build_kwargs: dict[str, Any] = {}
        if os.environ.get("PURS_SCAFFOLD_BUILD_TIMEOUT"):
            build_kwargs["timeout"] = int(os.environ["PURS_SCAFFOLD_BUILD_TIMEOUT"])
        strict = os.environ.get("PURS_SCAFFOLD_STRICT_BUILD", "")
        if strict:
            build_kwargs["strict"] = strict.strip().lower() in _TRUTHY

        return cls(build=BuildConfig(**build_kwargs), **kwargs)
