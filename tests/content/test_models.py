"""Tests for ContentRecord."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from titleslug.content.models import MANAGED_CONTENT_TYPE, UNSET_PUBLISH_DATE, ContentRecord


class TestContentRecord:
    def test_defaults(self):
        record = ContentRecord()
        assert record.id is None
        assert record.content_type == MANAGED_CONTENT_TYPE == "post"
        assert record.title == ""
        assert record.publish_date is None
        assert record.slug == ""

    @pytest.mark.parametrize("value", [UNSET_PUBLISH_DATE, "", "   "])
    def test_unset_publish_date_sentinels(self, value):
        assert ContentRecord(publish_date=value).publish_date is None

    def test_iso_publish_date_parsed(self):
        record = ContentRecord(publish_date="2024-03-05T10:15:00")
        assert record.publish_date == datetime(2024, 3, 5, 10, 15)

    def test_invalid_publish_date_rejected(self):
        with pytest.raises(ValidationError):
            ContentRecord(publish_date="someday")

    def test_json_round_trip_keeps_unset_date(self):
        record = ContentRecord(id=1, title="t", slug="s")
        restored = ContentRecord.model_validate_json(record.model_dump_json())
        assert restored == record
