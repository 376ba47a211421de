"""Content domain: the record handed over at save time and a JSON store.

The store stands in for a host's persistence layer: it runs the
before-insert filters and answers persisted-slug lookups.
"""

from titleslug.content.models import MANAGED_CONTENT_TYPE, UNSET_PUBLISH_DATE, ContentRecord
from titleslug.content.store import ContentStore

__all__ = [
    "MANAGED_CONTENT_TYPE",
    "UNSET_PUBLISH_DATE",
    "ContentRecord",
    "ContentStore",
]
