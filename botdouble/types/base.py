"""Base model shared by every Bot API object."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class TelegramObject(BaseModel):
    """A Bot API object.

    Unknown fields sent by the API are ignored. Python-side names that clash
    with keywords (``from``) are aliased, and either spelling is accepted on
    input.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Dump to the JSON shape the Bot API uses (aliases, no nulls)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
