"""
Unit Tests for view configuration and page payload models
"""

import pytest

from record_browser.config import (
    DEFAULT_COLUMNS,
    PagePayload,
    ViewConfig,
    ViewConfigError,
    default_view_config,
    load_view_config,
)


class TestDefaultViewConfig:
    def test_default_when_built_then_six_artwork_columns(self):
        config = default_view_config()
        assert config.field_names == [name for name, _ in DEFAULT_COLUMNS]
        assert config.headers[0] == "Title"
        assert config.headers[-1] == "End"


class TestLoadViewConfig:
    """Tests for YAML view files."""

    def test_load_when_mapping_form_then_columns_in_order(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text(
            "columns:\n"
            "  - field: title\n"
            "    header: Name\n"
            "  - field: date_start\n",
            encoding="utf-8",
        )

        config = load_view_config(path)

        assert config.field_names == ["title", "date_start"]
        assert config.headers == ["Name", "date_start"]

    def test_load_when_bare_list_then_treated_as_columns(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text("- field: title\n- field: artist_display\n  header: Artist\n", encoding="utf-8")

        config = load_view_config(path)

        assert config.headers == ["title", "Artist"]

    def test_load_when_file_missing_then_raises(self, tmp_path):
        with pytest.raises(ViewConfigError, match="not found"):
            load_view_config(tmp_path / "missing.yaml")

    def test_load_when_yaml_invalid_then_raises(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text("columns: [field: title\n", encoding="utf-8")
        with pytest.raises(ViewConfigError, match="Invalid YAML"):
            load_view_config(path)

    def test_load_when_file_empty_then_raises(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ViewConfigError, match="empty"):
            load_view_config(path)

    def test_load_when_duplicate_field_then_raises(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text("- field: title\n- field: title\n", encoding="utf-8")
        with pytest.raises(ViewConfigError, match="Duplicate column field"):
            load_view_config(path)

    def test_load_when_no_columns_then_raises(self, tmp_path):
        path = tmp_path / "view.yaml"
        path.write_text("columns: []\n", encoding="utf-8")
        with pytest.raises(ViewConfigError):
            load_view_config(path)


class TestViewConfigModel:
    def test_header_when_whitespace_only_then_field_name_used(self):
        config = ViewConfig.model_validate({"columns": [{"field": "title", "header": "   "}]})
        assert config.headers == ["title"]


class TestPagePayload:
    def test_payload_when_extra_record_fields_then_kept_as_values(self):
        payload = PagePayload.model_validate(
            {
                "pagination": {"total": 2, "limit": 12},
                "data": [{"id": 1, "title": "A"}, {"id": "b-2", "title": "B", "date_end": 1901}],
                "config": {"iiif_url": "ignored"},
            }
        )

        assert payload.pagination.total == 2
        assert payload.data[0].field_values() == {"title": "A"}
        assert payload.data[1].id == "b-2"
        assert payload.data[1].field_values() == {"title": "B", "date_end": 1901}

    def test_payload_when_data_missing_then_empty_list(self):
        payload = PagePayload.model_validate({"pagination": {"total": 0}})
        assert payload.data == []
