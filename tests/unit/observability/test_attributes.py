"""Tests for weakevents.observability.attributes module."""

from weakevents.observability import attributes
from weakevents.observability.attributes import (
    ATTR_ENTRIES_COMPACTED,
    ATTR_ERROR_TYPE,
    ATTR_EVENT_ID,
    ATTR_EVENT_NAME,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_COUNT,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
)


class TestAttributeConstants:
    """Tests for attribute constant definitions."""

    def test_library_attributes_have_weakevents_prefix(self):
        """Library-specific attributes use the weakevents prefix."""
        for name in (
            ATTR_EVENT_NAME,
            ATTR_EVENT_ID,
            ATTR_EVENT_TYPE,
            ATTR_HANDLER_NAME,
            ATTR_HANDLER_COUNT,
            ATTR_HANDLER_SUCCESS,
            ATTR_ENTRIES_COMPACTED,
        ):
            assert name.startswith("weakevents.")

    def test_error_type_follows_otel_convention(self):
        assert ATTR_ERROR_TYPE == "error.type"

    def test_attribute_values_are_unique(self):
        values = [
            value
            for name, value in vars(attributes).items()
            if name.startswith("ATTR_")
        ]
        assert len(values) == len(set(values))
