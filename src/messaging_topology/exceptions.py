"""Exceptions raised by the composer helpers.

The topology aggregation and the schema/form conversions never raise for any reported data;
only the helpers which act on the user's intent (sending a message, parsing a hand-written payload) do.
"""


class MessagingTopologyError(Exception):
    """Generic marker for messaging-topology specific exceptions."""


class TopologyUnavailableError(MessagingTopologyError):
    """Raised when an operation needs the local topology, but none was reported."""


class ChannelNotFoundError(MessagingTopologyError):
    """Raised when a channel does not exist, or cannot be used in the requested direction."""


class PayloadParseError(MessagingTopologyError):
    """Raised when a hand-written JSON payload cannot be parsed."""
