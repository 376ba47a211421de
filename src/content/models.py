"""Content domain models, pure Pydantic v2 data types.

A ContentRecord is the host's view of one content item at the moment it
is about to be saved. The slug pipeline reads ``id``, ``content_type``,
``title`` and ``publish_date`` and may fill in ``slug``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

MANAGED_CONTENT_TYPE = "post"

# Filter hook the host runs on a record just before persisting it.
BEFORE_INSERT = "before_insert_content"

# Hosts store "no publish date yet" as an all-zero timestamp.
UNSET_PUBLISH_DATE = "0000-00-00 00:00:00"


class ContentRecord(BaseModel):
    """A content item on its way into the store."""

    id: int | None = None
    content_type: str = MANAGED_CONTENT_TYPE
    title: str = ""
    publish_date: datetime | None = None
    slug: str = ""

    @field_validator("publish_date", mode="before")
    @classmethod
    def _unset_sentinel(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() in ("", UNSET_PUBLISH_DATE):
            return None
        return value
