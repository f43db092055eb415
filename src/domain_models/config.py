import os
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain_models.constants import (
    DEFAULT_CHILDREN_FIELD,
    DEFAULT_NAME_FIELD,
    DEFAULT_PARENT_FIELD,
)


def _safe_getenv(key: str, default: str) -> str:
    """Safely get environment variable with fallback."""
    val = os.getenv(key)
    if val is None or not val.strip():
        return default
    return val


class HierarchyConfig(BaseModel):
    """
    Configuration for building and querying hierarchies.

    Field names default to the conventional record layout and can be
    overridden through environment variables.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Record layout
    parent_field: str = Field(
        default_factory=lambda: _safe_getenv("HIERARCHY_PARENT_FIELD", DEFAULT_PARENT_FIELD),
        description="Attribute holding the parent reference of each record.",
    )
    name_field: str = Field(
        default_factory=lambda: _safe_getenv("HIERARCHY_NAME_FIELD", DEFAULT_NAME_FIELD),
        description="Attribute returned by children_of when only names are requested.",
    )
    children_field: str = Field(
        default_factory=lambda: _safe_getenv("HIERARCHY_CHILDREN_FIELD", DEFAULT_CHILDREN_FIELD),
        description="Key under which nested exports place child nodes.",
    )

    # Query behaviour
    ancestors_include_root: bool = Field(
        default=True,
        description="Whether ancestor walks emit the root as the farthest ancestor.",
    )

    # Diagnostics
    report_unreachable: bool = Field(
        default=True,
        description="Log a warning when records cannot be reached from the root.",
    )

    @field_validator("parent_field", "name_field", "children_field", mode="after")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        """Reject blank attribute names."""
        if not v or not v.strip():
            msg = "Attribute names cannot be empty."
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_distinct_fields(self) -> Self:
        """Nested exports must not overwrite the parent reference."""
        if self.children_field == self.parent_field:
            msg = (
                f"children_field and parent_field must differ "
                f"(both are '{self.parent_field}')."
            )
            raise ValueError(msg)
        return self

    @classmethod
    def default(cls) -> Self:
        """
        Returns the default configuration using Pydantic defaults.
        """
        return cls()
