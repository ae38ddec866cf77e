"""The root module contains the intended public API of messaging-topology.

Users should not need to import anything outside of the root.

There are two independent parts:
  - Topology aggregation: merge the topology descriptors of several services into one publish/subscribe graph, and render it with Mermaid.
  - Schema forms: turn a channel's payload schema into a message composer form, and turn the filled-in form back into a JSON payload.
"""

from importlib import import_module
from typing import TYPE_CHECKING

# import everything eagerly for IDEs/LSPs
if TYPE_CHECKING:
    from ._internal.identifiers import sanitize_identifier
    from .composer import (
        SendRequest,
        build_send_request,
        find_channel,
        generate_example,
        parse_json_payload,
        payload_errors,
    )
    from .config.shared import DiagramConfig, FormConfig
    from .config.viewer import TopologyViewerConfig
    from .core_definitions import ChannelDirection, ControlKind, FieldKind
    from .exceptions import (
        ChannelNotFoundError,
        MessagingTopologyError,
        PayloadParseError,
        TopologyUnavailableError,
    )
    from .form import (
        ComposerForm,
        FieldDescriptor,
        build_form,
        collect_payload,
        describe_fields,
        populate_example,
    )
    from .models import ChannelInfo, TopologyInfo
    from .topology import (
        Endpoint,
        TopicNode,
        TopologyGraph,
        aggregate,
        build_graph,
        generate_mermaid,
    )
    from .version import __version__, version_info, version_string

__all__ = (
    'ChannelDirection',
    'ChannelInfo',
    'ChannelNotFoundError',
    'ComposerForm',
    'ControlKind',
    'DiagramConfig',
    'Endpoint',
    'FieldDescriptor',
    'FieldKind',
    'FormConfig',
    'MessagingTopologyError',
    'PayloadParseError',
    'SendRequest',
    'TopicNode',
    'TopologyGraph',
    'TopologyInfo',
    'TopologyUnavailableError',
    'TopologyViewerConfig',
    '__version__',
    'aggregate',
    'build_form',
    'build_graph',
    'build_send_request',
    'collect_payload',
    'describe_fields',
    'find_channel',
    'generate_example',
    'generate_mermaid',
    'parse_json_payload',
    'payload_errors',
    'populate_example',
    'sanitize_identifier',
    'version_info',
    'version_string',
)

# PEP 562 stuff: do lazy imports for people who just want to import from the top-level module

__lazy_imports = {
    'ChannelDirection': '.core_definitions',
    'ChannelInfo': '.models',
    'ChannelNotFoundError': '.exceptions',
    'ComposerForm': '.form',
    'ControlKind': '.core_definitions',
    'DiagramConfig': '.config.shared',
    'Endpoint': '.topology',
    'FieldDescriptor': '.form',
    'FieldKind': '.core_definitions',
    'FormConfig': '.config.shared',
    'MessagingTopologyError': '.exceptions',
    'PayloadParseError': '.exceptions',
    'SendRequest': '.composer',
    'TopicNode': '.topology',
    'TopologyGraph': '.topology',
    'TopologyInfo': '.models',
    'TopologyUnavailableError': '.exceptions',
    'TopologyViewerConfig': '.config.viewer',
    '__version__': '.version',
    'aggregate': '.topology',
    'build_form': '.form',
    'build_graph': '.topology',
    'build_send_request': '.composer',
    'collect_payload': '.form',
    'describe_fields': '.form',
    'find_channel': '.composer',
    'generate_example': '.composer',
    'generate_mermaid': '.topology',
    'parse_json_payload': '.composer',
    'payload_errors': '.composer',
    'populate_example': '.form',
    'sanitize_identifier': '._internal.identifiers',
    'version_info': '.version',
    'version_string': '.version',
}


def __getattr__(attr_name: str) -> object:
    attr_module = __lazy_imports.get(attr_name)
    if attr_module:
        module = import_module(attr_module, package=__spec__.parent)
        return getattr(module, attr_name)

    msg = f'module {__name__!r} has no attribute {attr_name!r}'
    raise AttributeError(msg)


def __dir__() -> list[str]:
    return list(__all__)
