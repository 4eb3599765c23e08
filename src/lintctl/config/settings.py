"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``LINTCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``lintctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
the ``find_config`` walk-up discovery from :mod:`lintctl.config.discovery`.
An unreadable file surfaces as :class:`~lintctl.errors.ConfigError`;
:meth:`LintSettings.from_cli` turns that into a ``click.ClickException``.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from lintctl.config.discovery import find_config
from lintctl.config.models import (
    MarkdownConfig,
    NixConfig,
    PythonConfig,
    RunConfig,
    ScopeConfig,
    ShellConfig,
)
from lintctl.errors import ConfigError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``lintctl.toml`` file discovered via walk-up.

    Raises:
        ConfigError: the file cannot be read or is not valid TOML.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigError(f"Cannot read {toml_path}: {exc}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class LintSettings(BaseSettings):
    """Unified settings for the lintctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object. Stored on the
    ``AppContext`` at the CLI root level.

    Attributes:
        project_root: Directory holding ``lintctl.toml``, or CWD if no
            config was found. ``[scope] root`` is relative to it.
        config_path: The config file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LINTCTL_",
        "env_nested_delimiter": "__",
    }

    # --- Derived from the config file location, never read from TOML ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    scope: ScopeConfig = Field(default_factory=ScopeConfig)
    python: PythonConfig = Field(default_factory=PythonConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    nix: NixConfig = Field(default_factory=NixConfig)
    run: RunConfig = Field(default_factory=RunConfig)

    @property
    def scope_root(self) -> Path:
        """Absolute scope root: ``[scope] root`` resolved against ``project_root``."""
        return (self.project_root / self.scope.root).resolve()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> LintSettings:
        """Construct settings from a CLI invocation.

        Discovers ``lintctl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.

        Raises:
            click.ClickException: the config file exists but cannot be
                parsed, or a value fails validation.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent.resolve() if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc
        except ValidationError as exc:
            source = toml_path or "environment"
            msg = f"Invalid configuration ({source}): {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
