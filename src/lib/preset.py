"""
Option presets loaded from YAML

A preset file stores default options for each tool so a formatting style can
be shared between runs and machines:

    css:
      indent_type: tabs
      sort_declarations: true
      blank_line_after_rule: false
    diff:
      diff_type: split
      context_lines: 5

Values given on the command line override values from the preset, which
override the FORMATHUB_ environment defaults.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..config import appsettings
from ..models.css import CssConfig
from ..models.diff import DiffConfig


class PresetError(Exception):
    """Raised when a preset file cannot be loaded or holds invalid options"""
    pass


class Preset:
    """
    Tool options read from a YAML preset file
    """

    SECTIONS = ("css", "diff")

    def __init__(self, path: Optional[Path] = None):
        """
        Load a preset.

        Args:
            path: YAML file to read; None gives an empty preset

        Raises:
            PresetError: If the file is missing, unparsable, or not a mapping
                         of known sections
        """
        self.path = path
        self.options: Dict[str, Dict[str, Any]] = {section: {} for section in self.SECTIONS}

        if path is not None:
            self.options.update(self._options_load(path))

    def _options_load(self, path: Path) -> Dict[str, Dict[str, Any]]:
        """Load and check the preset YAML"""
        if not path.exists():
            raise PresetError(f"Preset file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PresetError(f"Failed to parse preset {path.name}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PresetError(f"Preset {path.name} must be a mapping of tool sections")

        unknown = set(data) - set(self.SECTIONS)
        if unknown:
            raise PresetError(f"Unknown preset sections: {', '.join(sorted(unknown))}")

        for section, values in data.items():
            if values is None:
                data[section] = {}
            elif not isinstance(values, dict):
                raise PresetError(f"Preset section '{section}' must be a mapping")

        return data

    def cssConfig_build(self, overrides: Optional[Dict[str, Any]] = None) -> CssConfig:
        """
        Build CssConfig from preset values plus overrides

        Raises:
            PresetError: If the combined options are invalid
        """
        return self._config_build(CssConfig, "css", overrides)

    def diffConfig_build(self, overrides: Optional[Dict[str, Any]] = None) -> DiffConfig:
        """
        Build DiffConfig from preset values plus overrides

        Raises:
            PresetError: If the combined options are invalid
        """
        return self._config_build(DiffConfig, "diff", overrides)

    def defaults_get(self, section: str) -> Dict[str, Any]:
        """Environment-level defaults (FORMATHUB_INDENT_SIZE, FORMATHUB_CONTEXT_LINES)"""
        if section == "css":
            return {"indent_size": appsettings.indent_size}
        return {"context_lines": appsettings.context_lines}

    def _config_build(self, model, section: str, overrides: Optional[Dict[str, Any]]):
        values = {**self.defaults_get(section), **self.options[section], **(overrides or {})}
        try:
            return model(**values)
        except ValidationError as e:
            raise PresetError(f"Invalid {section} options: {e}")

    def __repr__(self) -> str:
        return f"Preset(path='{self.path}')"
