# app/models/base.py
"""Base models for all entities."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
import uuid


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix."""
    unique_part = uuid.uuid4().hex[:12]
    return f"{prefix}_{unique_part}" if prefix else unique_part


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Naive UTC, the form pymongo hands back."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in MongoDB."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True


class TimestampMixin(CamelModel):
    """Mixin for timestamp fields."""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class BaseEntity(TimestampMixin):
    """Base entity stored as a MongoDB document."""

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
