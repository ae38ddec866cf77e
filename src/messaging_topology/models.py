"""Data model of the topology descriptors reported by each service.

A topology descriptor is a JSON document a service emits about itself:

    {
        "serviceName": "order-service",
        "version": "1.0.0",
        "channels": [
            {"channelName": "orders-out", "topic": "orders", "direction": "outgoing", "methodName": "publish"}
        ]
    }

Keys are camelCase on the wire and snake_case in Python. Unknown keys are ignored, so descriptors
produced by newer services can still be read.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

from ._internal.logger import logger
from .core_definitions import ChannelDirection  # noqa: TCH001 (Pydantic uses runtime annotations)


class ChannelInfo(BaseModel):
    """One declared message-passing endpoint of a service."""

    channel_name: Annotated[str, Field(min_length=1)]
    """
    Name of the channel, unique within its service
    """

    direction: ChannelDirection
    """
    'incoming' if the service consumes from the channel, 'outgoing' if it produces to it
    """

    method_name: str = ''
    """
    Name of the method (or field) bound to the channel
    """

    topic: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Broker topic backing the channel. If not reported, the channel name is used as the topic.
    """

    class_name: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Fully qualified name of the class declaring the channel (informational)
    """

    connector: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Name of the connector (i.e. 'smallrye-kafka') the channel is attached to (informational)
    """

    message_schema: Optional[Dict[str, Any]] = Field(default=None, alias='schema')  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    JSON schema of the message payload, if the service could describe it
    """

    example_payload: Any = None
    """
    Example message payload, if the service could generate one
    """

    @property
    def resolved_topic(self) -> str:
        """The topic string which joins this channel with channels of other services."""
        return self.topic or self.channel_name

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra='ignore'
    )


class TopologyInfo(BaseModel):
    """The topology descriptor of a single service."""

    service_name: Annotated[str, Field(min_length=1)]
    """
    Name of the service, should be unique among all services shown together
    """

    version: str = ''
    """
    Version of the service (informational)
    """

    channels: List[ChannelInfo] = Field(default_factory=list)  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Channels of the service, in the order the service reported them
    """

    group_id: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Group of the service artifact (informational)
    """

    artifact_id: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Artifact name of the service (informational)
    """

    project_name: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Project grouping related services (informational)
    """

    service_url: Optional[str] = None  # noqa: FA100 (Pydantic uses runtime annotations)
    """
    Base URL the service was reached at (informational)
    """

    @field_validator('channels', mode='before')
    @classmethod
    def _missing_channels_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra='ignore'
    )


def _valid_channels(service_name: Any, channels: list[Any]) -> list[ChannelInfo]:
    valid = []
    for index, entry in enumerate(channels):
        try:
            valid.append(ChannelInfo.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                f'Ignoring invalid channel #{index} of service {service_name!r}: {e.error_count()} validation error(s)'
            )
            logger.debug(str(e))
    return valid


def coerce_topology(value: TopologyInfo | Mapping[str, Any] | None) -> TopologyInfo | None:
    """Turn one reported topology into a TopologyInfo, or None if there is nothing usable.

    Failed remote fetches are commonly represented as None, and are dropped silently.
    Channels which fail validation are dropped with a warning, the rest of the service is kept.
    Descriptors which still fail validation are dropped with a warning; this function never raises.
    """
    if value is None:
        return None
    if isinstance(value, TopologyInfo):
        return value
    if not isinstance(value, Mapping):
        logger.warning(f'Ignoring topology descriptor of type {type(value).__name__}')
        return None
    channels = value.get('channels')
    if isinstance(channels, list):
        value = {**value, 'channels': _valid_channels(value.get('serviceName'), channels)}
    try:
        return TopologyInfo.model_validate(value)
    except ValidationError as e:
        logger.warning(
            f'Ignoring invalid topology descriptor for service {value.get("serviceName")!r}: {e.error_count()} validation error(s)'
        )
        logger.debug(str(e))
        return None
