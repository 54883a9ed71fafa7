"""
Base model for wire-facing schemas.

Python attributes are snake_case; JSON payloads (model output, saved
history, sync documents) use camelCase keys.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model that reads and writes camelCase keys.

    Fields can still be populated by their Python names, which keeps
    test builders and internal construction readable.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump to a JSON-ready dict with camelCase keys and absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
