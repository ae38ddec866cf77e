"""Core enumerations used throughout messaging-topology, for both the topology and the form side."""

from __future__ import annotations

from enum import Enum
from typing import Literal

ChannelDirection = Literal['incoming', 'outgoing']
"""
Direction of a channel, from the perspective of the service declaring it.

- 'incoming' - the service CONSUMES messages from the channel's topic
- 'outgoing' - the service PRODUCES messages to the channel's topic
"""


class FieldKind(str, Enum):
    """JSON Schema type of a single payload property.

    Anything which isn't one of the six recognized JSON types maps to UNKNOWN, which is rendered as plain text.
    """

    STRING = 'string'
    INTEGER = 'integer'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    ARRAY = 'array'
    OBJECT = 'object'
    UNKNOWN = 'unknown'

    @classmethod
    def from_schema_type(cls, value: object) -> FieldKind:
        """Map the raw 'type' value of a sub-schema to a FieldKind, never raising."""
        if isinstance(value, str) and value != cls.UNKNOWN.value:
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.UNKNOWN


class ControlKind(str, Enum):
    """The kind of input control a field is rendered with.

    The values match the HTML input types where one exists.
    """

    TEXT = 'text'
    SELECT = 'select'
    DATETIME = 'datetime-local'
    DATE = 'date'
    EMAIL = 'email'
    URL = 'url'
    NUMBER = 'number'
    CHECKBOX = 'checkbox'
    LIST_TEXTAREA = 'list-textarea'
    """multi-line control, accepts comma-separated scalars"""
    JSON_TEXTAREA = 'json-textarea'
    """multi-line control, accepts a JSON literal"""


STRING_FORMAT_CONTROLS = {
    'date-time': ControlKind.DATETIME,
    'date': ControlKind.DATE,
    'email': ControlKind.EMAIL,
    'uri': ControlKind.URL,
}
"""
String formats which get a type-appropriate single-line control. Any other format is rendered as free text.
"""
