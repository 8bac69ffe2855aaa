"""protog configuration.

Typed settings for rendering and for the command-line output step.  All
settings use Pydantic v2 models so they are validated at construction time
and can be serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class RenderConfig(BaseModel):
    """Whitespace policy handed to the ``Renderer``."""

    indent: bool = Field(default=True, description="Tab-indent field and method lines")
    compact: bool = Field(default=False, description="Drop every line break and tab")


class Config(BaseModel):
    """Global protog configuration.

    Created once by the CLI entry point (from the environment, then
    overridden by flags) and passed to the output helpers.
    """

    model_config = ConfigDict(validate_assignment=True)

    syntax: str = Field(default="proto3", min_length=1)
    output_dir: Path = Field(default=Path("."))
    force: bool = Field(default=False, description="Overwrite an existing .proto file")
    dryrun: bool = Field(default=False, description="Print instead of writing a file")
    render: RenderConfig = Field(default_factory=RenderConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PROTOG_SYNTAX, PROTOG_OUTPUT_DIR, PROTOG_FORCE,
            PROTOG_INDENT, PROTOG_COMPACT.
        """
        render_kwargs: dict[str, Any] = {}
        if os.environ.get("PROTOG_INDENT"):
            render_kwargs["indent"] = _env_flag("PROTOG_INDENT")
        if os.environ.get("PROTOG_COMPACT"):
            render_kwargs["compact"] = _env_flag("PROTOG_COMPACT")

        return cls(
            syntax=os.environ.get("PROTOG_SYNTAX", "proto3"),
            output_dir=Path(os.environ.get("PROTOG_OUTPUT_DIR", ".")),
            force=_env_flag("PROTOG_FORCE"),
            render=RenderConfig(**render_kwargs),
        )


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES
