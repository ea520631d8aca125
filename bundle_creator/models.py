"""Scaffold request model.

A ``ScaffoldRequest`` holds the parameters an operator supplies for one
bundle.  It is immutable once validated; everything derived from it lives in
the run's token table.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScaffoldRequest(BaseModel):
    """Parameters for generating one Contao bundle."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    vendor_name: str = Field(..., description="Composer vendor, e.g. 'markocupic'")
    repository_name: str = Field(..., description="Composer package name, e.g. 'demo-bundle'")
    bundle_name: str = Field(default="", description="Human readable bundle name")
    composer_description: str = Field(default="")
    license: str = Field(default="MIT")
    author_name: str = Field(default="")
    author_email: str = Field(default="")
    author_website: str = Field(default="")
    composer_package_version: str = Field(
        default="", description="Package version; empty omits the manifest field"
    )
    overwrite_existing: bool = Field(default=False)

    # Optional DCA table
    add_dca_table: bool = Field(default=False)
    dca_table: str = Field(default="", description="Table name, e.g. 'tl_demo'")

    # Optional frontend module
    add_frontend_module: bool = Field(default=False)
    frontend_module_name: str = Field(default="")
    frontend_module_category: str = Field(default="")
    frontend_module_category_trans: str = Field(
        default="", description="Label of the module category, optional"
    )
    frontend_module_trans: tuple[str, str] = Field(
        default=("", ""), description="Module label and description"
    )

    @field_validator("frontend_module_trans", mode="before")
    @classmethod
    def _pad_module_trans(cls, value: Any) -> Any:
        if value is None:
            return ("", "")
        if isinstance(value, str):
            return (value, "")
        if isinstance(value, (list, tuple)):
            items = ["" if v is None else str(v).strip() for v in value][:2]
            return tuple(items + [""] * (2 - len(items)))
        return value

    @property
    def wants_dca_table(self) -> bool:
        """The table stage runs only with the flag set and a table name given."""
        return self.add_dca_table and self.dca_table != ""


def load_request(path: str | Path) -> ScaffoldRequest:
    """Load a ``ScaffoldRequest`` from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the content does not describe a request.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(raw) or {}
    else:
        data = json.loads(raw)
    return ScaffoldRequest.model_validate(data)
