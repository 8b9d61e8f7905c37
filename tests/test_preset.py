"""
Preset loading tests

Tests YAML preset parsing, option precedence, and error reporting.
"""

import pytest

from formathub.lib.preset import Preset, PresetError
from formathub.models import CssConfig, DiffConfig


def preset_write(tmp_path, text, name="preset.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestLoading:
    """Reading preset files"""

    def test_no_preset(self):
        """Without a file the model defaults apply"""
        preset = Preset()
        assert preset.cssConfig_build() == CssConfig()
        assert preset.diffConfig_build() == DiffConfig()

    def test_sections_loaded(self, tmp_path):
        path = preset_write(tmp_path, "css:\n  indent_type: tabs\n  sort_declarations: true\ndiff:\n  diff_type: split\n")
        preset = Preset(path)

        css = preset.cssConfig_build()
        assert css.indent_type == "tabs"
        assert css.sort_declarations is True
        assert preset.diffConfig_build().diff_type == "split"

    def test_missing_section(self, tmp_path):
        path = preset_write(tmp_path, "diff:\n  context_lines: 5\n")
        preset = Preset(path)
        assert preset.cssConfig_build() == CssConfig()
        assert preset.diffConfig_build().context_lines == 5

    def test_empty_file(self, tmp_path):
        preset = Preset(preset_write(tmp_path, ""))
        assert preset.cssConfig_build() == CssConfig()

    def test_empty_section(self, tmp_path):
        preset = Preset(preset_write(tmp_path, "css:\n"))
        assert preset.cssConfig_build() == CssConfig()


class TestPrecedence:
    """Overrides beat preset values"""

    def test_override_wins(self, tmp_path):
        path = preset_write(tmp_path, "css:\n  mode: minify\n  indent_size: 8\n")
        config = Preset(path).cssConfig_build({"mode": "beautify"})

        assert config.mode == "beautify"
        assert config.indent_size == 8

    def test_unset_fields_use_defaults(self, tmp_path):
        path = preset_write(tmp_path, "diff:\n  ignore_case: true\n")
        config = Preset(path).diffConfig_build({"show_stats": False})

        assert config.ignore_case is True
        assert config.show_stats is False
        assert config.diff_type == "unified"


class TestErrors:
    """Invalid presets raise PresetError"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(PresetError, match="not found"):
            Preset(tmp_path / "nope.yaml")

    def test_bad_yaml(self, tmp_path):
        with pytest.raises(PresetError, match="Failed to parse"):
            Preset(preset_write(tmp_path, "css: [unclosed\n"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(PresetError, match="must be a mapping"):
            Preset(preset_write(tmp_path, "- css\n- diff\n"))

    def test_unknown_section(self, tmp_path):
        with pytest.raises(PresetError, match="Unknown preset sections: html"):
            Preset(preset_write(tmp_path, "html:\n  wrap: 80\n"))

    def test_section_not_mapping(self, tmp_path):
        with pytest.raises(PresetError, match="Preset section 'css' must be a mapping"):
            Preset(preset_write(tmp_path, "css: beautify\n"))

    def test_unknown_option(self, tmp_path):
        preset = Preset(preset_write(tmp_path, "css:\n  colour_scheme: dark\n"))
        with pytest.raises(PresetError, match="Invalid css options"):
            preset.cssConfig_build()

    def test_invalid_value(self, tmp_path):
        preset = Preset(preset_write(tmp_path, "diff:\n  context_lines: -1\n"))
        with pytest.raises(PresetError, match="Invalid diff options"):
            preset.diffConfig_build()

    def test_invalid_override(self):
        with pytest.raises(PresetError):
            Preset().cssConfig_build({"mode": "pretty"})
