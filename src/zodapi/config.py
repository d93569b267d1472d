"""Configuration resolution and atomic file writes.

This module resolves the effective :class:`~zodapi.models.GeneratorConfig`
for one run:

* **Project config** -- an optional ``./zodapi.json`` in the working
  directory, validated with Pydantic.  See :func:`load_project_config`.
* **Environment** -- ``ZODAPI_OUT_DIR``, ``ZODAPI_BASE_URL`` and
  ``ZODAPI_PACKAGE``.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and defaults into the final
  configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so a failed run never leaves a truncated output file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from zodapi.exceptions import ConfigError
from zodapi.models import GeneratorConfig

_PROJECT_CONFIG_FILENAME = "zodapi.json"

_ENV_OVERRIDES = {
    "ZODAPI_OUT_DIR": "out_dir",
    "ZODAPI_BASE_URL": "base_url",
    "ZODAPI_PACKAGE": "package_import",
}


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./zodapi.json``.

    Args:
        directory: Directory to look in; defaults to the current working
            directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_out_dir: Optional[str] = None,
    cli_base_url: Optional[str] = None,
) -> GeneratorConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_out_dir``, ``cli_base_url``)
        2. Environment variables (``ZODAPI_OUT_DIR``, ``ZODAPI_BASE_URL``,
           ``ZODAPI_PACKAGE``)
        3. Project config (``./zodapi.json``)
        4. Defaults

    Raises:
        ConfigError: If the merged settings fail validation.
    """
    settings: dict[str, Any] = dict(load_project_config() or {})

    for env_var, key in _ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            settings[key] = value

    if cli_out_dir is not None:
        settings["out_dir"] = cli_out_dir
    if cli_base_url is not None:
        settings["base_url"] = cli_base_url

    try:
        return GeneratorConfig.model_validate(settings)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
