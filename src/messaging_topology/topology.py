"""This module merges the topology descriptors of several services into one publish/subscribe graph.

Every service only knows about its own channels. Channels of different services are joined on their
resolved topic (the reported topic, or the channel name if no topic was reported): a service with an
outgoing channel on a topic produces to it, a service with an incoming channel on a topic consumes from it.

The graph is rendered as Mermaid flowchart statements:

    order_service["📦 order-service"]
    topic_orders(("💬 orders"))
    order_service -->|"publish"| topic_orders
    topic_orders -->|"onOrder"| billing_service

Rendering only reflects what the services reported. Services may be missing (a failed remote fetch is
passed in as None), in which case their edges are simply absent from the diagram.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

from ._internal.identifiers import escape_label, sanitize_identifier, topic_identifier
from ._internal.logger import logger
from .config.shared import DiagramConfig
from .config.viewer import TopologyViewerConfig
from .models import coerce_topology

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .models import TopologyInfo


class Endpoint(NamedTuple):
    """A (service, method) pair attached to a topic."""

    service: str
    method: str


@dataclass
class TopicNode:
    """Producers and consumers of a single topic, in the order they were discovered."""

    topic: str
    producers: list[Endpoint] = field(default_factory=list)
    consumers: list[Endpoint] = field(default_factory=list)

    @property
    def identifier(self) -> str:
        return topic_identifier(self.topic)

    @property
    def connection_count(self) -> int:
        return len(self.producers) + len(self.consumers)

    def add_producer(self, endpoint: Endpoint) -> None:
        if endpoint not in self.producers:
            self.producers.append(endpoint)

    def add_consumer(self, endpoint: Endpoint) -> None:
        if endpoint not in self.consumers:
            self.consumers.append(endpoint)


@dataclass
class TopologyGraph:
    """The unified graph of all services and topics.

    Both services and topics keep first-seen order, which keeps the rendered diagram deterministic.
    """

    services: list[str] = field(default_factory=list)
    """
    Names of every service which reported a topology
    """

    topics: dict[str, TopicNode] = field(default_factory=dict)
    """
    Mapping of resolved topic string to its node
    """

    def add_service(self, service_name: str) -> None:
        if service_name not in self.services:
            self.services.append(service_name)

    def topic(self, topic: str) -> TopicNode:
        """Get the node of a topic, creating it on first use."""
        node = self.topics.get(topic)
        if node is None:
            node = TopicNode(topic)
            self.topics[topic] = node
        return node


def build_graph(topologies: Iterable[TopologyInfo | Mapping[str, Any] | None]) -> TopologyGraph:
    """Merge the reported topologies into a single graph.

    Params:
      - topologies - topology of each service, conventionally the local service first. Entries may be
        TopologyInfo objects, raw descriptor mappings, or None. None and invalid entries are skipped.

    Returns:
      A TopologyGraph. This function never raises for reported data.
    """
    graph = TopologyGraph()
    for reported in topologies:
        topology = coerce_topology(reported)
        if topology is None:
            logger.debug('Skipping missing topology')
            continue

        graph.add_service(topology.service_name)
        for channel in topology.channels:
            endpoint = Endpoint(topology.service_name, channel.method_name)
            node = graph.topic(channel.resolved_topic)
            if channel.direction == 'incoming':
                node.add_consumer(endpoint)
            else:
                node.add_producer(endpoint)
    return graph


def _service_statement(service_name: str, config: DiagramConfig) -> str:
    return f'{sanitize_identifier(service_name)}["{config.service_icon} {escape_label(service_name)}"]'


def _topic_statement(node: TopicNode, config: DiagramConfig) -> str:
    label = f'{config.topic_icon} {escape_label(node.topic)}'
    if config.include_styles:
        label += f'<br/><small>P:{len(node.producers)} C:{len(node.consumers)}</small>'
    return f'{node.identifier}(("{label}"))'


def _edge_statements(node: TopicNode) -> list[str]:
    statements = [
        f'{sanitize_identifier(producer.service)} -->|"{escape_label(producer.method)}"| {node.identifier}'
        for producer in node.producers
    ]
    statements.extend(
        f'{node.identifier} -->|"{escape_label(consumer.method)}"| {sanitize_identifier(consumer.service)}'
        for consumer in node.consumers
    )
    return statements


def _style_statements(graph: TopologyGraph, config: DiagramConfig) -> list[str]:
    statements = [
        'classDef serviceClass fill:#4A90E2,stroke:#2E5C8A,stroke-width:2px,color:#fff',
        'classDef topicClass fill:#F5A623,stroke:#D68910,stroke-width:2px,color:#fff',
        'classDef hotTopicClass fill:#E74C3C,stroke:#C0392B,stroke-width:3px,color:#fff',
    ]
    statements.extend(
        f'class {sanitize_identifier(service)} serviceClass' for service in graph.services
    )
    for node in graph.topics.values():
        css_class = (
            'hotTopicClass'
            if node.connection_count >= config.hot_topic_threshold
            else 'topicClass'
        )
        statements.append(f'class {node.identifier} {css_class}')
    return statements


def _diagram_config(config: DiagramConfig | TopologyViewerConfig | None) -> DiagramConfig:
    if config is None:
        return DiagramConfig()
    if isinstance(config, TopologyViewerConfig):
        return config.diagram
    return config


def render_statements(
    graph: TopologyGraph, config: DiagramConfig | TopologyViewerConfig | None = None
) -> list[str]:
    """Render a graph into Mermaid statements: service nodes, topic nodes, then edges (and styles, if configured)."""
    config = _diagram_config(config)
    statements = [_service_statement(service, config) for service in graph.services]
    statements.extend(_topic_statement(node, config) for node in graph.topics.values())
    for node in graph.topics.values():
        statements.extend(_edge_statements(node))
    if config.include_styles:
        statements.extend(_style_statements(graph, config))
    return statements


def aggregate(
    topologies: Iterable[TopologyInfo | Mapping[str, Any] | None],
    config: DiagramConfig | TopologyViewerConfig | None = None,
) -> list[str]:
    """Merge the reported topologies and render them as an ordered list of diagram statements.

    The output is purely a function of the input: calling this twice with the same topologies
    produces equal lists.
    """
    return render_statements(build_graph(topologies), config)


def generate_mermaid(
    topologies: Iterable[TopologyInfo | Mapping[str, Any] | None],
    config: DiagramConfig | TopologyViewerConfig | None = None,
) -> str:
    """Render the complete Mermaid document, ready to be handed to a Mermaid renderer."""
    config = _diagram_config(config)
    lines = [f'graph {config.orientation}']
    lines.extend(f'    {statement}' for statement in aggregate(topologies, config))
    return '\n'.join(lines)
