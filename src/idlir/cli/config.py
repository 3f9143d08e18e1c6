#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration files for the idlir command line.

Renderer options are resolved from, in increasing precedence, the renderer
defaults, one configuration file and the command line flags. The file is the
first of:

1. the ``--config`` path;
2. the path in ``$IDLIR_CONFIG``;
3. the nearest ``.idlir.toml``, ``.idlir.yaml``, ``.idlir.yml``,
   ``.idlir.json`` or ``pyproject.toml`` with a ``[tool.idlir]`` table, walking
   up from the working directory;
4. one of the ``.idlir.*`` files in the home directory.

Keys are option field names, written with dashes or underscores:

.. code-block:: toml

    [tool.idlir]
    indent = "    "
    validate-literals = false

"""

from __future__ import annotations

import logging
import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional

from idlir.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from idlir.exceptions import FileError, MalformedFileError, ValidationError
from idlir.options.json_ir import JsonIrRendererOptions
from idlir.utils.io_utils import read_structured_file

logger = logging.getLogger(__name__)


def _tool_table(pyproject: Path) -> Optional[Dict[str, Any]]:
    data = read_structured_file(pyproject, "pyproject.toml")
    tool = data.get("tool")
    table = tool.get(PYPROJECT_TOOL_SECTION) if isinstance(tool, dict) else None
    if table is not None and not isinstance(table, dict):
        raise MalformedFileError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] must be a table, got {type(table).__name__}", file_path=str(pyproject)
        )
    return table


def _dotfile_in(directory: Path) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def _walk_up(start: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    yield from start.parents


def find_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file that applies to ``start_dir``.

    In each directory from ``start_dir`` up to the filesystem root, the
    ``.idlir.*`` files are tried in ``CONFIG_FILENAMES`` order, then
    ``pyproject.toml`` if it has a ``[tool.idlir]`` table. A ``pyproject.toml``
    that cannot be decoded is skipped. The home directory's ``.idlir.*`` files
    come last.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, defaults to the working directory
    home : Path, optional
        Home directory, defaults to ``Path.home()``

    Returns
    -------
    Path or None
        The configuration file, or None when there is none

    """
    for directory in _walk_up(start_dir or Path.cwd()):
        dotfile = _dotfile_in(directory)
        if dotfile is not None:
            return dotfile

        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _tool_table(pyproject) is not None:
                    return pyproject
            except FileError as e:
                logger.debug("Skipping %s: %s", pyproject, e.message)

    return _dotfile_in(home or Path.home())


def resolve_config_path(
    explicit: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Choose the configuration file from the flag, the environment or discovery."""
    if explicit:
        return Path(explicit)
    from_env = (os.environ if environ is None else environ).get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return find_config_file()


def read_config(config_path: Path | str) -> Dict[str, Any]:
    """Read the option mapping from a configuration file.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``, ``.yml`` or ``.json`` file, or a
        ``pyproject.toml`` whose ``[tool.idlir]`` table is read

    Returns
    -------
    dict
        The option mapping, empty for an empty file or a missing table

    Raises
    ------
    FileError
        If the file does not exist or cannot be read
    MalformedFileError
        If the file cannot be decoded or its root is not a mapping

    """
    config_path = Path(config_path)
    if config_path.name.lower() == "pyproject.toml":
        return _tool_table(config_path) or {}

    config = read_structured_file(config_path, "configuration file")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise MalformedFileError(
            f"Configuration file must contain a mapping at root level, got {type(config).__name__}",
            file_path=str(config_path),
        )
    return config


def options_from_config(config: Dict[str, Any], base: Optional[JsonIrRendererOptions] = None) -> JsonIrRendererOptions:
    """Build renderer options from a configuration mapping.

    Parameters
    ----------
    config : dict
        Configuration values keyed by option field name
    base : JsonIrRendererOptions, optional
        Options to start from, defaults to the renderer defaults

    Returns
    -------
    JsonIrRendererOptions
        Options with the configured values applied

    Raises
    ------
    ValidationError
        If the mapping contains an unknown key or a value of the wrong type

    """
    base = base or JsonIrRendererOptions()
    known = {f.name: f for f in fields(JsonIrRendererOptions)}

    updates: Dict[str, Any] = {}
    for key, value in config.items():
        field_name = key.replace("-", "_")
        if field_name not in known:
            raise ValidationError(f"Unknown configuration key: {key}", parameter_name=key, parameter_value=value)
        expected = type(getattr(base, field_name))
        if not isinstance(value, expected):
            raise ValidationError(
                f"Configuration key '{key}' expects {expected.__name__}, got {type(value).__name__}",
                parameter_name=key,
                parameter_value=value,
            )
        updates[field_name] = value

    try:
        return base.create_updated(**updates)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e
