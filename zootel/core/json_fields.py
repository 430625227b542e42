"""
JSON-in-column fields.

Several tables keep nested, schema-less structures (business hours, image
lists, specialties, ...) in TEXT columns. Each such field is declared once
here with its expected container type and default, and every read goes
through ``load`` which never raises: malformed or mistyped content is logged
and replaced by the default.
"""
import copy
import json
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class JSONField:
    """A typed JSON column value with an explicit default"""

    def __init__(self, name: str, container: type, default_factory: Callable[[], Any]):
        self.name = name
        self.container = container
        self.default_factory = default_factory

    def default(self):
        return self.default_factory()

    def load(self, raw: Any):
        """Parse the stored value, falling back to the default on any problem"""
        if raw is None:
            return self.default()
        if isinstance(raw, self.container):
            return raw
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8", errors="replace")
        if not isinstance(raw, str) or not raw.strip():
            return self.default()
        try:
            value = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Malformed JSON in {self.name}, using default: {e}")
            return self.default()
        if not isinstance(value, self.container):
            logger.warning(
                f"Unexpected JSON type in {self.name}: {type(value).__name__}, using default"
            )
            return self.default()
        return value

    def dump(self, value: Any) -> str:
        """Serialize a value for storage, storing the default for None"""
        if value is None:
            value = self.default()
        return json.dumps(value)


DEFAULT_BUSINESS_HOURS = {
    "monday": {"open": "09:00", "close": "17:00"},
    "tuesday": {"open": "09:00", "close": "17:00"},
    "wednesday": {"open": "09:00", "close": "17:00"},
    "thursday": {"open": "09:00", "close": "17:00"},
    "friday": {"open": "09:00", "close": "17:00"},
    "saturday": {"closed": True},
    "sunday": {"closed": True},
}


def default_business_hours() -> dict:
    return copy.deepcopy(DEFAULT_BUSINESS_HOURS)


BUSINESS_HOURS = JSONField("businessHours", dict, dict)
IMAGES = JSONField("images", list, list)
SPECIALTIES = JSONField("specialties", list, list)
WORKING_HOURS = JSONField("workingHours", dict, dict)
PREFERENCES = JSONField("preferences", dict, dict)
PHOTOS = JSONField("photos", list, list)
MEDICAL_INFO = JSONField("medicalInfo", dict, dict)
