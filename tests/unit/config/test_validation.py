"""Tests for chrono_cli.config.validation."""

from __future__ import annotations

from chrono_cli.config.validation import validate_config


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_config_has_no_warnings(self) -> None:
        """Test that a fully valid config produces no warnings."""
        data = {
            "output": {"format": "json"},
            "metadata": {"path": ".chrono/metadata.yaml"},
            "platform": {"created_by": "chrono_cli", "template": "go-api"},
        }
        assert validate_config(data, source="test") == []

    def test_unknown_top_level_key_with_suggestion(self) -> None:
        """Test a misspelled top-level key and its suggestion."""
        warnings = validate_config({"ouput": {"format": "json"}}, source="test")

        assert len(warnings) == 1
        assert warnings[0].key == "ouput"
        assert warnings[0].suggestion == "output"

    def test_unknown_section_key(self) -> None:
        """Test an unknown key inside a section."""
        warnings = validate_config({"platform": {"created_bye": "x"}}, source="test")

        assert len(warnings) == 1
        assert warnings[0].key == "platform.created_bye"
        assert warnings[0].suggestion == "created_by"

    def test_section_must_be_mapping(self) -> None:
        """Test a section given as a scalar."""
        warnings = validate_config({"output": "json"}, source="test")

        assert len(warnings) == 1
        assert "must be a mapping" in warnings[0].message

    def test_invalid_output_format(self) -> None:
        """Test an unsupported output format."""
        warnings = validate_config({"output": {"format": "jsn"}}, source="test")

        assert len(warnings) == 1
        assert warnings[0].key == "output.format"
        assert warnings[0].suggestion == "json"

    def test_non_mapping_config(self) -> None:
        """Test a config that is not a mapping."""
        warnings = validate_config(["a"], source="test")  # type: ignore[arg-type]

        assert len(warnings) == 1
        assert warnings[0].source == "test"
