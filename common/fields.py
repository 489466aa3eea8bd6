"""Strict integer parsing for request bodies and path segments."""

from rest_framework import serializers

from .exceptions import InvalidArgument

# Largest value a BigAutoField primary key can hold.
MAX_ID = 2**63 - 1


class StrictIntegerField(serializers.IntegerField):
    """IntegerField that only accepts JSON integers.

    DRF's IntegerField coerces "2" and 3.0; this one rejects them, and booleans.
    """

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


def parse_positive_id(raw, message: str = "invalid id") -> int:
    """Parse an id path segment; it must be a positive base-10 integer."""
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        raise InvalidArgument(message)
    value = int(raw)
    if value <= 0 or value > MAX_ID:
        raise InvalidArgument(message)
    return value
