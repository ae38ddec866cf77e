from __future__ import annotations

import re

from ..constants import IDENTIFIER_UNSAFE_REGEX, TOPIC_ID_PREFIX

_UNSAFE = re.compile(IDENTIFIER_UNSAFE_REGEX)


def sanitize_identifier(text: str) -> str:
    """Replace every character which may not appear in a Mermaid node identifier with an underscore.

    Distinct inputs may produce the same identifier; callers get no warning about it.
    """
    return _UNSAFE.sub('_', text)


def topic_identifier(topic: str) -> str:
    return sanitize_identifier(TOPIC_ID_PREFIX + topic)


def escape_label(text: str) -> str:
    """Labels are wrapped in double quotes, so inner quotes use Mermaid's entity code."""
    return text.replace('"', '#quot;')
