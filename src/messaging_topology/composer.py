"""Helpers for the message composer: finding a channel, building the send request, and generating examples.

The composer works in one of two modes. In form mode the payload comes from form.collect_payload();
in JSON mode the user writes the payload by hand and parse_json_payload() reads it. Either way,
build_send_request() produces the request handed to the service's send endpoint.

Only the LOCAL service can send messages, and only on its outgoing channels.
"""

from __future__ import annotations

import datetime
import json
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from ._internal.logger import logger
from ._internal.schema_validation import validate_against_schema, validate_schema
from .constants import FALLBACK_EXAMPLE_MESSAGE
from .core_definitions import FieldKind
from .exceptions import ChannelNotFoundError, PayloadParseError, TopologyUnavailableError

if TYPE_CHECKING:
    from .core_definitions import ChannelDirection
    from .models import ChannelInfo, TopologyInfo


class SendRequest(BaseModel):
    """Body of a request to publish a message on a channel of the local service."""

    channel: str
    """
    Name of the (outgoing) channel
    """

    topic: str
    """
    The resolved topic of the channel
    """

    payload: Any
    """
    The message payload, serialized as JSON by the service
    """

    # pydantic config
    model_config = ConfigDict(frozen=True)


def find_channel(
    topology: TopologyInfo | None, channel_name: str, direction: ChannelDirection
) -> ChannelInfo | None:
    """Find the channel with the given name and direction, or None if the topology has no such channel."""
    if topology is None:
        return None
    for channel in topology.channels:
        if channel.channel_name == channel_name and channel.direction == direction:
            return channel
    return None


def build_send_request(
    topology: TopologyInfo | None, channel_name: str, payload: Any
) -> SendRequest:
    """Build the request to send 'payload' on an outgoing channel of the local service.

    Params:
      - topology - the LOCAL service's topology
      - channel_name - name of the channel to send on
      - payload - the JSON payload

    Raises:
      - TopologyUnavailableError - if the local topology was not reported
      - ChannelNotFoundError - if the channel doesn't exist or isn't outgoing
    """
    if topology is None:
        msg = 'Topology not initialized'
        raise TopologyUnavailableError(msg)
    channel = find_channel(topology, channel_name, 'outgoing')
    if channel is None:
        msg = f'Channel not found or not outgoing: {channel_name}'
        raise ChannelNotFoundError(msg)
    return SendRequest(channel=channel.channel_name, topic=channel.resolved_topic, payload=payload)


def parse_json_payload(text: str) -> Any:
    """Parse a payload written in the composer's JSON mode.

    Raises:
      - PayloadParseError - if the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f'Payload is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})'
        raise PayloadParseError(msg) from e


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat().replace('+00:00', 'Z')


def _example_value(name: str, sub_schema: Mapping[str, Any]) -> Any:
    enum = sub_schema.get('enum')
    if isinstance(enum, list) and enum:
        return enum[0]

    lowered = name.lower()
    if 'id' in lowered:
        return f'example-{uuid.uuid4().hex[:8]}'
    if 'timestamp' in lowered or 'date' in lowered or 'time' in lowered:
        return _now_iso()
    if 'email' in lowered:
        return 'user@example.com'
    if 'name' in lowered:
        return 'Example Name'

    kind = FieldKind.from_schema_type(sub_schema.get('type'))
    # the field name gives no hint, but the declared format does
    if kind is FieldKind.STRING and sub_schema.get('format') == 'date-time':
        return _now_iso()
    if kind is FieldKind.STRING:
        return 'example-value'
    if kind is FieldKind.INTEGER:
        return 123
    if kind is FieldKind.NUMBER:
        return 123.45
    if kind is FieldKind.BOOLEAN:
        return True
    if kind is FieldKind.ARRAY:
        return ['item1', 'item2']
    return {'key': 'value'}


def generate_example(schema: Any) -> dict[str, Any]:
    """Generate an example payload for a channel which did not report one.

    The values are guessed from the property names first (ids, timestamps, emails, names), then from the types.
    A channel without a schema gets a generic example message.
    """
    properties = schema.get('properties') if isinstance(schema, Mapping) else None
    if not isinstance(properties, Mapping) or not properties:
        return {
            'id': f'example-{uuid.uuid4().hex[:8]}',
            'message': FALLBACK_EXAMPLE_MESSAGE,
            'timestamp': _now_iso(),
        }
    return {
        name: _example_value(name, sub_schema if isinstance(sub_schema, Mapping) else {})
        for name, sub_schema in properties.items()
    }


def payload_errors(schema: Any, payload: Any) -> list[str]:
    """Validate a payload against the channel's schema, before it is sent.

    Returns a list of error strings; an empty list means the payload is valid. A missing schema accepts any payload,
    an invalid schema is reported as errors instead of being used.
    """
    if not isinstance(schema, Mapping) or not schema:
        return []
    schema_problems = validate_schema(schema)
    if schema_problems:
        logger.warning(f'Channel schema is not a valid JSON schema ({len(schema_problems)} problem(s))')
        return [f'schema {problem}' for problem in schema_problems]
    return validate_against_schema(schema, payload)
