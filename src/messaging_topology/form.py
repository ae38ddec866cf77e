"""This module converts between the JSON schema of a channel's payload and an editable message form.

There are three steps, all of them pure functions of their inputs:

###
describe_fields
###

Each top-level property of the schema becomes a FieldDescriptor, which tells the UI which control to render
(text input, select, checkbox, number input, multi-line input...). Unknown or missing types are rendered as
plain text, they are never an error.

###
populate_example
###

The channel's example payload is converted into display values for those controls, i.e. ISO-8601 instants
are shown as 'YYYY-MM-DDTHH:MM', arrays as comma-separated text and objects as indented JSON.

###
collect_payload
###

The raw control values are converted back into a JSON payload, coercing each value to the declared type of its
field. Fields left empty are omitted from the payload, so the payload never carries explicit nulls for untouched
optional fields. Values which can't be coerced are sent as the raw text instead of failing the whole payload.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from ._internal.coercion import (
    parse_integer,
    parse_number,
    parse_toggle,
    to_datetime_local,
    to_iso_instant,
)
from ._internal.logger import logger
from .config.shared import FormConfig
from .config.viewer import TopologyViewerConfig
from .core_definitions import STRING_FORMAT_CONTROLS, ControlKind, FieldKind

if TYPE_CHECKING:
    from collections.abc import Iterable


class FieldDescriptor(NamedTuple):
    """Description of a single top-level property of a payload schema.

    NOTE: both this class and all properties in it should remain immutable after creation
    """

    name: str
    """
    Name of the property, also the key in the payload
    """
    type: FieldKind
    """
    The JSON type of the property, UNKNOWN if the schema did not declare a recognized type
    """
    format: str | None = None
    """
    One of 'date-time', 'date', 'email', 'uri' - only set for string properties
    """
    enum_values: tuple[Any, ...] | None = None
    """
    The allowed values, in schema order, if the schema declares an enum
    """
    required: bool = False
    """
    Whether the property is listed in the schema's 'required' array
    """
    description: str | None = None
    """
    Human readable description of the property, shown as a hint next to the control
    """

    @property
    def control(self) -> ControlKind:
        """The control used to edit this field. An enum always renders as a select, even if a format is set."""
        if self.enum_values is not None:
            return ControlKind.SELECT
        if self.type is FieldKind.STRING:
            return STRING_FORMAT_CONTROLS.get(self.format or '', ControlKind.TEXT)
        if self.type in (FieldKind.INTEGER, FieldKind.NUMBER):
            return ControlKind.NUMBER
        if self.type is FieldKind.BOOLEAN:
            return ControlKind.CHECKBOX
        if self.type is FieldKind.ARRAY:
            return ControlKind.LIST_TEXTAREA
        if self.type is FieldKind.OBJECT:
            return ControlKind.JSON_TEXTAREA
        return ControlKind.TEXT

    @property
    def step(self) -> str | None:
        """Step attribute of a number control."""
        if self.type is FieldKind.INTEGER:
            return '1'
        if self.type is FieldKind.NUMBER:
            return 'any'
        return None

    @property
    def placeholder(self) -> str | None:
        if self.control is ControlKind.LIST_TEXTAREA:
            return 'Enter comma-separated values'
        if self.control is ControlKind.JSON_TEXTAREA:
            return 'Enter JSON object'
        return None


class ComposerForm(NamedTuple):
    """Everything the UI needs to render a message composer for one channel."""

    fields: list[FieldDescriptor]
    values: dict[str, Any]
    """
    prefilled display values, keyed by field name
    """

    @property
    def available(self) -> bool:
        """If False, the UI should show a "no schema available" state instead of an empty form."""
        return bool(self.fields)


def describe_fields(schema: Any) -> list[FieldDescriptor]:
    """Derive a FieldDescriptor for each top-level property of the schema, in the schema's property order.

    A schema without 'properties' (or no schema at all) produces an empty list.
    """
    if not isinstance(schema, Mapping):
        return []
    properties = schema.get('properties')
    if not isinstance(properties, Mapping):
        return []
    required = schema.get('required')
    required_names = (
        {name for name in required if isinstance(name, str)}
        if isinstance(required, (list, tuple))
        else set()
    )

    fields = []
    for name, sub_schema in properties.items():
        if not isinstance(sub_schema, Mapping):
            # boolean subschemas (i.e. "field": true) carry no type information
            sub_schema = {}
        kind = FieldKind.from_schema_type(sub_schema.get('type'))
        field_format = sub_schema.get('format')
        if kind is not FieldKind.STRING or field_format not in STRING_FORMAT_CONTROLS:
            field_format = None
        enum = sub_schema.get('enum')
        description = sub_schema.get('description')
        fields.append(
            FieldDescriptor(
                name=name,
                type=kind,
                format=field_format,
                enum_values=tuple(enum) if isinstance(enum, (list, tuple)) else None,
                required=name in required_names,
                description=description if isinstance(description, str) else None,
            )
        )
    return fields


def _list_item_text(item: Any) -> str:
    if item is None:
        return ''
    if isinstance(item, str):
        return item
    return json.dumps(item)


def _display_value(field: FieldDescriptor, value: Any, config: FormConfig) -> Any:
    if field.type is FieldKind.BOOLEAN:
        return value is True
    if field.format == 'date-time' and value:
        converted = to_datetime_local(value)
        if converted is None:
            logger.debug(f'Example value of field {field.name!r} is not an ISO-8601 instant')
            return value
        return converted
    if isinstance(value, (list, tuple)):
        return config.array_separator.join(_list_item_text(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, indent=config.json_indent, ensure_ascii=False)
    return value


def populate_example(
    fields: Iterable[FieldDescriptor],
    example: Any,
    config: FormConfig | TopologyViewerConfig | None = None,
) -> dict[str, Any]:
    """Convert an example payload into prefilled display values for the form controls.

    Keys of the example which don't name a known field are ignored. A missing example produces an empty mapping.
    """
    if config is None:
        config = FormConfig()
    elif isinstance(config, TopologyViewerConfig):
        config = config.form
    if not isinstance(example, Mapping):
        return {}
    by_name = {field.name: field for field in fields}
    values = {}
    for key, value in example.items():
        field = by_name.get(key)
        if field is None:
            continue
        values[key] = _display_value(field, value, config)
    return values


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _coerce(field: FieldDescriptor, raw: Any) -> Any:
    if field.type is FieldKind.BOOLEAN:
        return parse_toggle(raw)

    if field.type in (FieldKind.INTEGER, FieldKind.NUMBER):
        if _is_blank(raw):
            return None
        parsed = parse_integer(raw) if field.type is FieldKind.INTEGER else parse_number(raw)
        if parsed is None:
            logger.warning(f'Field {field.name!r}: {raw!r} is not a valid {field.type.value}, sending raw text')
            return raw
        return parsed

    if field.format == 'date-time' and not _is_blank(raw):
        instant = to_iso_instant(raw)
        if instant is None:
            logger.warning(f'Field {field.name!r}: {raw!r} is not a valid date-time, sending raw text')
            return raw
        return instant

    if field.type is FieldKind.ARRAY:
        if _is_blank(raw):
            return None
        if isinstance(raw, (list, tuple)):
            return list(raw)
        return [piece.strip() for piece in str(raw).split(',') if piece.strip()]

    if field.type is FieldKind.OBJECT:
        if _is_blank(raw):
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except (ValueError, RecursionError):
            # oversized integer literals raise a plain ValueError, deep nesting a RecursionError
            logger.warning(f'Field {field.name!r} does not contain valid JSON, sending raw text')
            return raw

    return None if raw is None or raw == '' else raw


def collect_payload(fields: Iterable[FieldDescriptor], raw_values: Mapping[str, Any]) -> dict[str, Any]:
    """Build the JSON payload from the raw control values.

    Params:
      - fields - the descriptors generated from the channel's schema
      - raw_values - control name -> raw control value (text, or the toggle state for checkboxes)

    Returns:
      The payload. Fields whose coerced value is None or an empty string are omitted.
    """
    by_name = {field.name: field for field in fields}
    payload = {}
    for name, raw in raw_values.items():
        field = by_name.get(name)
        if field is None:
            logger.debug(f'No field descriptor for control {name!r}, skipping')
            continue
        value = _coerce(field, raw)
        if value is None or (isinstance(value, str) and value == ''):
            continue
        payload[name] = value
    return payload


def build_form(
    schema: Any, example: Any = None, config: FormConfig | TopologyViewerConfig | None = None
) -> ComposerForm:
    """Describe the fields of a schema and prefill them from the example in one step."""
    fields = describe_fields(schema)
    return ComposerForm(fields, populate_example(fields, example, config))
