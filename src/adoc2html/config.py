#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Settings discovery and loading for the adoc2html docs service.

This module handles automatic discovery of configuration files, loading
settings from TOML, YAML or JSON, and applying ``DOC_*`` environment
variable overrides on top of them.
"""

from __future__ import annotations

import json
import logging
import math
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from adoc2html.constants import CONFIG_FILENAMES, DEFAULT_REPO_REF, DEFAULT_UPSTREAM_TIMEOUT, ENV_PREFIX
from adoc2html.exceptions import ConfigError

logger = logging.getLogger(__name__)

TOOL_SECTION = "adoc2html"


@dataclass(frozen=True)
class ServerSettings:
    """Settings of the docs service.

    Parameters
    ----------
    upstream : str
        Base URL of the raw content host (e.g. ``https://raw.githubusercontent.com``)
    repo_owner : str
        Owner of the documentation repository
    repo_name : str
        Name of the documentation repository
    repo_ref : str, default "main"
        Branch, tag or commit to read from
    repo_root_path : str, default ""
        Directory of the book inside the repository
    site_url : str, default ""
        Base URL the converted pages are published under; empty for
        site-absolute links
    timeout : float, default 10.0
        Upstream request timeout in seconds

    """

    upstream: str = field(default="", metadata={"help": "Base URL of the raw content host", "env": "UPSTREAM"})
    repo_owner: str = field(default="", metadata={"help": "Repository owner", "env": "REPO_OWNER"})
    repo_name: str = field(default="", metadata={"help": "Repository name", "env": "REPO_NAME"})
    repo_ref: str = field(default=DEFAULT_REPO_REF, metadata={"help": "Repository ref", "env": "REPO_REF"})
    repo_root_path: str = field(
        default="", metadata={"help": "Book directory inside the repository", "env": "REPO_ROOT_PATH"}
    )
    site_url: str = field(default="", metadata={"help": "Base URL of the published site", "env": "SITE_URL"})
    timeout: float = field(
        default=DEFAULT_UPSTREAM_TIMEOUT, metadata={"help": "Upstream timeout in seconds", "env": "TIMEOUT"}
    )

    def __post_init__(self) -> None:
        """Validate setting values.

        Raises
        ------
        ConfigError
            If the timeout is not a finite positive number.

        """
        timeout = self.timeout
        is_number = isinstance(timeout, (int, float)) and not isinstance(timeout, bool)
        if not is_number or not math.isfinite(timeout) or timeout <= 0:
            raise ConfigError(f"timeout must be a finite positive number, got {timeout!r}")

    def validate_upstream(self) -> None:
        """Check that the upstream repository is fully specified.

        Raises
        ------
        ConfigError
            If ``upstream``, ``repo_owner`` or ``repo_name`` is missing

        """
        missing = [name for name in ("upstream", "repo_owner", "repo_name") if not getattr(self, name)]
        if missing:
            env_names = ", ".join(f"{ENV_PREFIX}{name.upper()}" for name in missing)
            raise ConfigError(f"Missing docs service settings: {', '.join(missing)} (set {env_names})")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.adoc2html]`` section from pyproject.toml.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        The section, or an empty dict if it does not exist

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", config_path=str(pyproject_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path)) from e

    config = data.get("tool", {}).get(TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root, checking each
    directory for ``.adoc2html.toml``, ``.adoc2html.yaml``,
    ``.adoc2html.yml``, ``.adoc2html.json`` and finally a pyproject.toml
    with a ``[tool.adoc2html]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for the search, defaults to the working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if not config_path.is_file():
                continue
            if filename != "pyproject.toml":
                return config_path
            try:
                if _load_pyproject_section(config_path):
                    return config_path
            except ConfigError:
                logger.debug("Skipping unreadable %s", config_path)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load settings from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Settings loaded from the file

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            # An empty YAML file loads as None
            config = {} if config is None else config
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", config_path=str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", config_path=str(config_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", config_path=str(config_path)) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a table/mapping at root level, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def _environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for settings_field in fields(ServerSettings):
        env_name = f"{ENV_PREFIX}{settings_field.metadata['env']}"
        if env_name in environ:
            overrides[settings_field.name] = environ[env_name]
    return overrides


def _coerce_timeout(value: Any, source: Optional[str]) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"timeout must be a number, got {value!r}", config_path=source)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"timeout must be a number, got {value!r}", config_path=source) from e


def load_settings(
    config_path: Path | str | None = None,
    environ: Optional[Mapping[str, str]] = None,
    start_dir: Optional[Path] = None,
) -> ServerSettings:
    """Load docs service settings.

    Settings are read from ``config_path`` (or the first discovered
    configuration file), then ``DOC_*`` environment variables override them.

    Parameters
    ----------
    config_path : Path, str or None, default None
        Explicit configuration file; discovery is skipped when given
    environ : Mapping[str, str] or None, default None
        Environment to read overrides from, defaults to ``os.environ``
    start_dir : Path or None, default None
        Directory discovery starts from, defaults to the working directory

    Returns
    -------
    ServerSettings
        The merged settings

    Raises
    ------
    ConfigError
        If a file cannot be loaded or holds unknown or invalid settings

    Examples
    --------
        >>> settings = load_settings(environ={"DOC_UPSTREAM": "https://raw.example.com"})
        >>> settings.upstream
        'https://raw.example.com'

    """
    path = Path(config_path) if config_path is not None else find_config_in_parents(start_dir)
    source = str(path) if path is not None else None

    values: Dict[str, Any] = {}
    if path is not None:
        logger.debug("Loading settings from %s", path)
        values.update(load_config_file(path))

    known = {settings_field.name for settings_field in fields(ServerSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown settings in {source}: {', '.join(unknown)}", config_path=source)

    values.update(_environment_overrides(os.environ if environ is None else environ))
    if "timeout" in values:
        values["timeout"] = _coerce_timeout(values["timeout"], source)
    for name in known - {"timeout"}:
        if name in values:
            values[name] = str(values[name])

    return ServerSettings(**values)


__all__ = [
    "ServerSettings",
    "find_config_in_parents",
    "load_config_file",
    "load_settings",
]
