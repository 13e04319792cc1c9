"""
Configuration models for the record browser.

Two kinds of document are validated here: the JSON page payload returned by
the remote source, and the optional YAML view file describing which record
fields are displayed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ViewConfigError(RuntimeError):
    """Raised when a view configuration file cannot be loaded or validated."""


class PaginationPayload(BaseModel):
    """Pagination block of a page response."""

    model_config = ConfigDict(extra="ignore")

    total: int = Field(..., ge=0, description="Number of records across all pages")


class RecordPayload(BaseModel):
    """One entry of the ``data`` array. Every field except ``id`` is kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: Union[int, str] = Field(..., description="Record identity")

    def field_values(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class PagePayload(BaseModel):
    """Body of ``GET <endpoint>?page=<n>``."""

    model_config = ConfigDict(extra="ignore")

    pagination: PaginationPayload
    data: List[RecordPayload] = Field(default_factory=list)


class ColumnConfig(BaseModel):
    """A displayed record field."""

    field: str = Field(..., min_length=1, description="Key in the record payload")
    header: str = Field(default="", description="Column title; defaults to the field name")

    @field_validator("header")
    @classmethod
    def _strip_header(cls, value: str) -> str:
        return value.strip()

    @property
    def title(self) -> str:
        return self.header or self.field


class ViewConfig(BaseModel):
    """Columns shown for each record, in display order."""

    columns: List[ColumnConfig] = Field(..., min_length=1)

    @field_validator("columns")
    @classmethod
    def _unique_fields(cls, value: List[ColumnConfig]) -> List[ColumnConfig]:
        seen = set()
        for column in value:
            if column.field in seen:
                raise ValueError(f"Duplicate column field: {column.field}")
            seen.add(column.field)
        return value

    @property
    def field_names(self) -> List[str]:
        return [column.field for column in self.columns]

    @property
    def headers(self) -> List[str]:
        return [column.title for column in self.columns]


DEFAULT_COLUMNS = (
    ("title", "Title"),
    ("place_of_origin", "Origin"),
    ("artist_display", "Display"),
    ("inscriptions", "Inscriptions"),
    ("date_start", "Start"),
    ("date_end", "End"),
)


def default_view_config() -> ViewConfig:
    return ViewConfig(
        columns=[ColumnConfig(field=name, header=header) for name, header in DEFAULT_COLUMNS]
    )


def load_view_config(path: Path) -> ViewConfig:
    """Load and validate a YAML view configuration."""
    path = Path(path)
    if not path.exists():
        raise ViewConfigError(f"View config not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ViewConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        raise ViewConfigError(f"View config is empty: {path}")
    if isinstance(raw, list):
        raw = {"columns": raw}
    try:
        return ViewConfig.model_validate(raw)
    except ValidationError as exc:
        raise ViewConfigError(f"Invalid view config {path}: {exc}") from exc
