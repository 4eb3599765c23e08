"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lintctl.toml only contains
overrides. A project with no lintctl.toml at all gets every default.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def _coerce_string_list(value: Any) -> Any:
    """Accept a bare string where a list of strings is expected."""
    if isinstance(value, str):
        return [value]
    return value


StringList = Annotated[tuple[str, ...], BeforeValidator(_coerce_string_list)]


# --- lintctl.toml sections ---


class ScopeConfig(BaseModel):
    """[scope] section."""

    model_config = {"frozen": True}

    # Relative to the directory holding lintctl.toml.
    root: str = "."


class PythonConfig(BaseModel):
    """[python] section."""

    model_config = {"frozen": True}

    project_paths: StringList = ()
    force_include: StringList = ()
    extensions: StringList = ("py", "pyi")
    default_search_roots: StringList = ("src", "scripts", "tests")


class ShellConfig(BaseModel):
    """[shell] section."""

    model_config = {"frozen": True}

    search_roots: StringList = ("src", "scripts", "tests")
    extensions: StringList = ("sh",)


class MarkdownConfig(BaseModel):
    """[markdown] section."""

    model_config = {"frozen": True}

    search_patterns: StringList = ("README.md", "AGENTS.md", "pages", "blog", "docs")
    root_files: StringList = ("README.md", "AGENTS.md")
    extensions: StringList = ("md",)
    wrap: str = "keep"


class NixConfig(BaseModel):
    """[nix] section."""

    model_config = {"frozen": True}

    search_patterns: StringList = ("flake.nix", "shell.nix", "default.nix", "nix/**/*.nix")


class RunConfig(BaseModel):
    """[run] section."""

    model_config = {"frozen": True}

    timeout_seconds: float | None = Field(default=None, gt=0)

