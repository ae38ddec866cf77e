"""Miscellaneous constants used by messaging-topology which users may obtain value from knowing about."""

IDENTIFIER_UNSAFE_REGEX = r'[^A-Za-z0-9_]'
"""
Every character matching this regex is replaced with an underscore when a service name or topic is turned into a diagram node identifier.

NOTE: two distinct names which only differ in unsafe characters (i.e. "order-service" and "order.service") map to the SAME identifier.
This is a known limitation, the diagram will merge those nodes.
"""

TOPIC_ID_PREFIX = 'topic_'
"""
Prefix prepended to a topic name BEFORE sanitizing it, so topic nodes never clash with a service node of the same name.
"""

DATETIME_LOCAL_FORMAT = '%Y-%m-%dT%H:%M'
"""
Representation of a date-time used by form controls: local input with minute precision and no zone information.
"""

FALLBACK_EXAMPLE_MESSAGE = 'Example message'
"""
Message used in the generated example payload when a channel reports no schema at all.
"""
