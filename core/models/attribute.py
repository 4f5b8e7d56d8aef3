# ============================================================================
# ATTRIBUTE MODEL
# ============================================================================
# STATUS: Domain model - Field-level metadata for catalog datasets
# PURPOSE: Attribute definition with optional coded-value domain
# ============================================================================
"""
Attribute Model

A field definition shared by one or more datasets. In the normalized
catalog shape attributes live in a top-level list and are keyed by `id`;
in the embedded shape each dataset carries its own records keyed by `name`
and the index merges them.

Enumerated attributes carry an ordered list of coded values:
    [{"code": 1, "label": "Open", "description": "Route open to traffic"}]
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import AttributeType

_TRUE_STRINGS = frozenset({"true", "yes", "y", "1"})


class CodedValue(BaseModel):
    """One allowed (code, label, description) triple of an enumerated attribute."""

    code: Any = None
    label: Optional[str] = None
    description: Optional[str] = None

    model_config = {"extra": "allow", "frozen": True}

    @field_validator("label", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @property
    def code_text(self) -> str:
        return "" if self.code is None else str(self.code)


class Attribute(BaseModel):
    """
    Attribute (field) definition.
    Unknown document fields are kept so change requests echo the full record.
    """

    # Identity - `id` in the normalized shape, `name` in the embedded shape
    id: Optional[str] = Field(default=None, description="Attribute identifier")
    name: Optional[str] = Field(default=None, description="Field name (embedded shape)")

    # Display
    label: Optional[str] = None
    type: Optional[str] = Field(default=None, description="Declared type string")
    nullable: bool = False
    description: Optional[str] = None

    # Examples - `example` as written, `examples` accumulated across datasets
    example: Any = None
    examples: List[Any] = Field(default_factory=list)

    # Coded values - only meaningful when type is "enumerated"
    values: List[CodedValue] = Field(default_factory=list)

    model_config = {"extra": "allow", "frozen": True}

    # ----------------------------------------------------------------
    # Validators
    # ----------------------------------------------------------------

    @field_validator("id", "name", "label", "type", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("nullable", mode="before")
    @classmethod
    def coerce_nullable(cls, v: Any) -> bool:
        # Hand-edited catalogs write "false" / "no" / "0" as strings
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        return bool(v)

    @field_validator("values", mode="before")
    @classmethod
    def coerce_values(cls, v: Any) -> List[Any]:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]

    @field_validator("examples", mode="before")
    @classmethod
    def coerce_examples(cls, v: Any) -> List[Any]:
        if v is None:
            return []
        return v if isinstance(v, list) else [v]

    # ----------------------------------------------------------------
    # Derived
    # ----------------------------------------------------------------

    @property
    def key(self) -> Optional[str]:
        """Index key: id if present, otherwise name."""
        return self.id or self.name

    @property
    def attribute_type(self) -> AttributeType:
        return AttributeType.parse(self.type)

    @property
    def has_example(self) -> bool:
        """True if the record declared an `example` (even a falsy one)."""
        return "example" in self.model_fields_set

    @property
    def coded_values(self) -> List[CodedValue]:
        """Coded values in document order; empty unless enumerated."""
        if self.attribute_type != AttributeType.ENUMERATED:
            return []
        return list(self.values)

    def with_examples(self, examples: List[Any]) -> "Attribute":
        """
        Copy carrying accumulated examples.

        The set-field bookkeeping is copied from this record, so dumps with
        exclude_unset still show the record as written in the catalog.
        """
        values = dict(self)
        values["examples"] = list(examples)
        return type(self).model_construct(_fields_set=set(self.model_fields_set), **values)


__all__ = ["Attribute", "CodedValue"]
