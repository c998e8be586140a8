#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading.

Option files are looked up in the working directory and then in each parent
directory, in this order: ``.htmlremark.toml``, ``.htmlremark.yaml``,
``.htmlremark.yml``, ``.htmlremark.json`` and finally a ``pyproject.toml``
that has a ``[tool.htmlremark]`` table. A file holds a flat mapping of
:class:`~htmlremark.options.RemarkOptions` field names, plus an optional
``preset`` key naming the dialect the other keys are applied on top of::

    preset = "markdown_extra"
    inline_links = true
    in_word_emphasis = "add_spaces"
    ignored_html_elements = {span = ["class"]}
"""

import json
import logging
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from htmlremark.constants import DEFAULT_PRESET
from htmlremark.exceptions import ValidationError
from htmlremark.options import IN_WORD_EMPHASIS_NAMES, IgnoredHtmlElement, InWordEmphasis, RemarkOptions, get_preset

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".htmlremark.toml", ".htmlremark.yaml", ".htmlremark.yml", ".htmlremark.json"]
PYPROJECT_SECTION = "htmlremark"
PRESET_ENV_VAR = "HTMLREMARK_TYPE"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.htmlremark]`` table from ``pyproject.toml``, or ``{}`` when absent."""
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(config, dict):
        raise ValidationError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            parameter_name="config",
            parameter_value=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching ``start_dir`` and its parents.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to the first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()
    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or ``pyproject.toml`` file.

    Raises
    ------
    ValidationError
        If the file cannot be read, parsed, or does not hold a mapping

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ValidationError(
            f"Configuration file does not exist: {config_path}",
            parameter_name="config",
            parameter_value=str(config_path),
        )

    ext = config_path.suffix.lower()
    try:
        if config_path.name.lower() == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ValidationError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml",
                parameter_name="config",
                parameter_value=str(config_path),
            )
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(
            f"Error reading config file {config_path}: {e}",
            parameter_name="config",
            parameter_value=str(config_path),
            original_error=e,
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValidationError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            parameter_name="config",
            parameter_value=str(config_path),
        )
    logger.debug("Loaded configuration from %s", config_path)
    return config


def options_from_mapping(data: Mapping[str, Any], default_preset: str = DEFAULT_PRESET) -> RemarkOptions:
    """Build options from a configuration mapping.

    Parameters
    ----------
    data : Mapping
        Option values keyed by field name, with an optional ``preset`` key
    default_preset : str, default "markdown"
        Preset used when ``data`` names none

    Raises
    ------
    ValidationError
        For unknown keys, unknown presets or invalid values

    Examples
    --------
        >>> options = options_from_mapping({"preset": "github", "hardwraps": False})
        >>> options.inline_links, options.hardwraps
        (True, False)

    """
    values = dict(data)
    options = get_preset(str(values.pop("preset", default_preset)))
    known = {f.name for f in fields(RemarkOptions)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValidationError(
            f"Unknown option(s): {', '.join(unknown)}",
            parameter_name="config",
            parameter_value=unknown,
        )

    if "in_word_emphasis" in values:
        values["in_word_emphasis"] = _parse_in_word_emphasis(values["in_word_emphasis"])
    if "ignored_html_elements" in values:
        values["ignored_html_elements"] = _parse_ignored_elements(values["ignored_html_elements"])
    return options.create_updated(**values)


def _parse_in_word_emphasis(value: Any) -> InWordEmphasis:
    if isinstance(value, InWordEmphasis):
        return value
    if isinstance(value, Mapping):
        return InWordEmphasis(
            preserve=bool(value.get("preserve", True)),
            add_spacing=bool(value.get("add_spacing", False)),
        )
    key = str(value).lower().replace("-", "_")
    if key not in IN_WORD_EMPHASIS_NAMES:
        raise ValidationError(
            f"in_word_emphasis must be one of {', '.join(IN_WORD_EMPHASIS_NAMES)}, got {value!r}",
            parameter_name="in_word_emphasis",
            parameter_value=value,
        )
    return IN_WORD_EMPHASIS_NAMES[key]


def _parse_ignored_elements(value: Any) -> tuple[IgnoredHtmlElement, ...]:
    if isinstance(value, Mapping):
        elements = []
        for tag, attrs in value.items():
            if isinstance(attrs, str):
                attrs = [attrs]
            elements.append(IgnoredHtmlElement.create(str(tag), *(attrs or ())))
        return tuple(elements)
    if isinstance(value, (list, tuple)):
        return tuple(
            item if isinstance(item, IgnoredHtmlElement) else IgnoredHtmlElement.create(str(item)) for item in value
        )
    raise ValidationError(
        "ignored_html_elements must be a list of tag names or a mapping of tag to attributes",
        parameter_name="ignored_html_elements",
        parameter_value=value,
    )
