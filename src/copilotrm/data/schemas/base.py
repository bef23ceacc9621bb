"""Shared pydantic configuration for domain schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable domain record.
    
    Python code uses snake_case field names; camelCase aliases let JSON
    produced by ingestion and transport layers validate unchanged.
    """
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
    
    def to_payload(self) -> dict:
        """JSON-safe, camelCase representation for audit payloads."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
