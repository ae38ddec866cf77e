"""
Tests for converting payload schemas into form fields, and form values back into payloads.
"""

import pytest
from messaging_topology import (
    ControlKind,
    FieldDescriptor,
    FieldKind,
    FormConfig,
    TopologyViewerConfig,
    build_form,
    collect_payload,
    describe_fields,
    populate_example,
)

from tests.fixtures.example_topologies import ORDER_EXAMPLE, ORDER_SCHEMA

PERSON_SCHEMA = {
    'type': 'object',
    'properties': {
        'name': {'type': 'string'},
        'age': {'type': 'integer'},
    },
    'required': ['name'],
}

DATETIME_SCHEMA = {'properties': {'at': {'type': 'string', 'format': 'date-time'}}}


# FIXTURES ###############


@pytest.fixture(name='order_fields')
def _fixture_order_fields():
    return describe_fields(ORDER_SCHEMA)


@pytest.fixture(name='datetime_fields')
def _fixture_datetime_fields():
    return describe_fields(DATETIME_SCHEMA)


# DESCRIBE FIELDS ########


def test_describe_fields_keeps_property_order(order_fields):
    assert [f.name for f in order_fields] == list(ORDER_SCHEMA['properties'])


def test_describe_fields_kinds_and_controls(order_fields):
    by_name = {f.name: f for f in order_fields}
    expected = {
        'orderId': (FieldKind.STRING, ControlKind.TEXT),
        'quantity': (FieldKind.INTEGER, ControlKind.NUMBER),
        'price': (FieldKind.NUMBER, ControlKind.NUMBER),
        'express': (FieldKind.BOOLEAN, ControlKind.CHECKBOX),
        'createdAt': (FieldKind.STRING, ControlKind.DATETIME),
        'status': (FieldKind.STRING, ControlKind.SELECT),
        'tags': (FieldKind.ARRAY, ControlKind.LIST_TEXTAREA),
        'address': (FieldKind.OBJECT, ControlKind.JSON_TEXTAREA),
        'customerEmail': (FieldKind.STRING, ControlKind.EMAIL),
        'notes': (FieldKind.UNKNOWN, ControlKind.TEXT),
    }
    assert {name: (f.type, f.control) for name, f in by_name.items()} == expected


def test_describe_fields_details(order_fields):
    by_name = {f.name: f for f in order_fields}
    assert by_name['orderId'].required is True
    assert by_name['quantity'].required is True
    assert by_name['price'].required is False
    assert by_name['orderId'].description == 'unique order identifier'
    assert by_name['price'].description is None
    assert by_name['status'].enum_values == ('NEW', 'PAID', 'SHIPPED')
    assert by_name['createdAt'].format == 'date-time'
    assert by_name['quantity'].step == '1'
    assert by_name['price'].step == 'any'
    assert by_name['orderId'].step is None
    assert by_name['tags'].placeholder == 'Enter comma-separated values'
    assert by_name['address'].placeholder == 'Enter JSON object'


def test_format_only_applies_to_strings():
    fields = describe_fields({'properties': {'n': {'type': 'integer', 'format': 'date-time'}}})
    assert fields[0].format is None
    assert fields[0].control is ControlKind.NUMBER


def test_unrecognized_formats_render_as_text():
    fields = describe_fields({'properties': {'ip': {'type': 'string', 'format': 'ipv4'}}})
    assert fields[0].format is None
    assert fields[0].control is ControlKind.TEXT


@pytest.mark.parametrize(
    ('sub_schema', 'kind'),
    [
        ({}, FieldKind.UNKNOWN),
        ({'type': 'null'}, FieldKind.UNKNOWN),
        ({'type': 'unknown'}, FieldKind.UNKNOWN),
        ({'type': ['string', 'null']}, FieldKind.UNKNOWN),
        (True, FieldKind.UNKNOWN),
    ],
)
def test_unrecognized_types_degrade_to_text(sub_schema, kind):
    fields = describe_fields({'properties': {'x': sub_schema}})
    assert fields == [FieldDescriptor('x', kind)]
    assert fields[0].control is ControlKind.TEXT


@pytest.mark.parametrize(
    'schema',
    [None, {}, {'type': 'object'}, {'properties': {}}, {'properties': 'nope'}, 'nope'],
)
def test_no_properties_no_fields(schema):
    assert describe_fields(schema) == []
    assert build_form(schema).available is False


def test_malformed_required_is_ignored():
    fields = describe_fields({'properties': {'a': {'type': 'string'}}, 'required': 'a'})
    assert fields[0].required is False


# POPULATE EXAMPLE #######


def test_populate_example(order_fields):
    values = populate_example(order_fields, ORDER_EXAMPLE)
    assert values == {
        'orderId': 'example-1234abcd',
        'quantity': 3,
        'price': 9.99,
        'express': True,
        'createdAt': '2024-01-19T20:21',
        'status': 'NEW',
        'tags': 'gift, fragile',
        'address': '{\n  "city": "Oak Ridge",\n  "zip": "37830"\n}',
    }


def test_populate_example_converts_to_utc_minutes():
    fields = describe_fields({'properties': {'at': {'type': 'string', 'format': 'date-time'}}})
    assert populate_example(fields, {'at': '2024-03-01T01:30:59+02:00'}) == {
        'at': '2024-02-29T23:30'
    }


def test_populate_example_keeps_unparseable_datetimes():
    fields = describe_fields({'properties': {'at': {'type': 'string', 'format': 'date-time'}}})
    assert populate_example(fields, {'at': 'yesterday'}) == {'at': 'yesterday'}


def test_populate_example_boolean_checked_state():
    fields = describe_fields({'properties': {'flag': {'type': 'boolean'}}})
    assert populate_example(fields, {'flag': True}) == {'flag': True}
    assert populate_example(fields, {'flag': False}) == {'flag': False}
    assert populate_example(fields, {'flag': 'true'}) == {'flag': False}


def test_populate_example_array_items():
    fields = describe_fields({'properties': {'items': {'type': 'array'}}})
    assert populate_example(fields, {'items': [1, 'two', None, True]}) == {
        'items': '1, two, , true'
    }


def test_populate_example_config():
    fields = describe_fields(ORDER_SCHEMA)
    values = populate_example(
        fields, ORDER_EXAMPLE, FormConfig(array_separator=',', json_indent=0)
    )
    assert values['tags'] == 'gift,fragile'
    assert values['address'] == '{\n"city": "Oak Ridge",\n"zip": "37830"\n}'


@pytest.mark.parametrize('example', [None, [], 'text', 42])
def test_populate_example_without_mapping(order_fields, example):
    assert populate_example(order_fields, example) == {}


def test_build_form(order_fields):
    form = build_form(ORDER_SCHEMA, ORDER_EXAMPLE)
    assert form.available is True
    assert form.fields == order_fields
    assert form.values == populate_example(order_fields, ORDER_EXAMPLE)


# COLLECT PAYLOAD ########


def test_collect_payload_round_trip():
    fields = describe_fields(PERSON_SCHEMA)
    payload = collect_payload(fields, {'name': 'Ada', 'age': '37'})
    assert payload == {'name': 'Ada', 'age': 37}
    assert isinstance(payload['age'], int)


def test_collect_payload_omits_empty_values():
    fields = describe_fields(PERSON_SCHEMA)
    payload = collect_payload(fields, {'name': 'Ada', 'age': ''})
    assert payload == {'name': 'Ada'}
    assert 'age' not in payload
    assert collect_payload(fields, {'name': None, 'age': None}) == {}


def test_collect_payload_all_types(order_fields):
    raw_values = {
        'orderId': 'o-1',
        'quantity': '37.9',
        'price': '3.14159',
        'express': False,
        'createdAt': '2024-01-19T20:21',
        'status': 'PAID',
        'tags': ' a, b ,, c ',
        'address': '{"city": "X"}',
        'customerEmail': '',
        'notes': 'free text',
    }
    assert collect_payload(order_fields, raw_values) == {
        'orderId': 'o-1',
        'quantity': 37,
        'price': 3.14159,
        'express': False,
        'createdAt': '2024-01-19T20:21:00.000Z',
        'status': 'PAID',
        'tags': ['a', 'b', 'c'],
        'address': {'city': 'X'},
        'notes': 'free text',
    }


def test_collect_payload_skips_unknown_controls():
    fields = describe_fields(PERSON_SCHEMA)
    assert collect_payload(fields, {'name': 'Ada', 'bogus': 'x'}) == {'name': 'Ada'}


def test_collect_payload_invalid_json_falls_back_to_text(caplog: pytest.LogCaptureFixture):
    fields = describe_fields({'properties': {'meta': {'type': 'object'}}})
    assert collect_payload(fields, {'meta': '{not json'}) == {'meta': '{not json'}
    assert 'does not contain valid JSON' in caplog.text


def test_collect_payload_invalid_number_falls_back_to_text(caplog: pytest.LogCaptureFixture):
    fields = describe_fields(PERSON_SCHEMA)
    assert collect_payload(fields, {'age': 'abc'}) == {'age': 'abc'}
    assert 'is not a valid integer' in caplog.text


def test_collect_payload_invalid_datetime_falls_back_to_text():
    fields = describe_fields({'properties': {'at': {'type': 'string', 'format': 'date-time'}}})
    assert collect_payload(fields, {'at': 'not a date'}) == {'at': 'not a date'}


def test_collect_payload_number_parsing():
    fields = describe_fields(
        {'properties': {'i': {'type': 'integer'}, 'n': {'type': 'number'}}}
    )
    assert collect_payload(fields, {'i': '-12px', 'n': '1.5e3'}) == {'i': -12, 'n': 1500.0}
    assert collect_payload(fields, {'i': 7, 'n': 2.5}) == {'i': 7, 'n': 2.5}
    assert collect_payload(fields, {'i': '   ', 'n': ''}) == {}


def test_collect_payload_toggle_values():
    fields = describe_fields({'properties': {'flag': {'type': 'boolean'}}})
    assert collect_payload(fields, {'flag': True}) == {'flag': True}
    assert collect_payload(fields, {'flag': 'on'}) == {'flag': True}
    assert collect_payload(fields, {'flag': None}) == {'flag': False}


def test_collect_payload_arrays():
    fields = describe_fields({'properties': {'tags': {'type': 'array'}}})
    assert collect_payload(fields, {'tags': ''}) == {}
    assert collect_payload(fields, {'tags': ',,'}) == {'tags': []}
    assert collect_payload(fields, {'tags': ['x']}) == {'tags': ['x']}


def test_collect_payload_keeps_whitespace_text():
    fields = describe_fields({'properties': {'s': {'type': 'string'}}})
    assert collect_payload(fields, {'s': ' '}) == {'s': ' '}


def test_example_survives_form_round_trip(order_fields):
    values = populate_example(order_fields, ORDER_EXAMPLE)
    payload = collect_payload(order_fields, values)
    assert payload['quantity'] == ORDER_EXAMPLE['quantity']
    assert payload['price'] == ORDER_EXAMPLE['price']
    assert payload['express'] is True
    assert payload['createdAt'] == '2024-01-19T20:21:00.000Z'
    assert payload['tags'] == ORDER_EXAMPLE['tags']
    assert payload['address'] == ORDER_EXAMPLE['address']


# OUT OF RANGE VALUES ####


def test_populate_example_keeps_instants_outside_utc_range(datetime_fields):
    # shifting to UTC would move this instant before year 1
    example = {'at': '0001-01-01T00:10:00+01:00'}
    assert populate_example(datetime_fields, example) == example


def test_collect_payload_keeps_instants_outside_utc_range(
    datetime_fields, caplog: pytest.LogCaptureFixture
):
    # shifting to UTC would move this instant past year 9999
    raw_values = {'at': '9999-12-31T23:30:00-01:00'}
    assert collect_payload(datetime_fields, raw_values) == raw_values
    assert 'is not a valid date-time' in caplog.text


@pytest.mark.parametrize('raw', ['37', '1700000000', ' 12.5 ', '-3'])
def test_collect_payload_numeric_text_is_not_a_datetime(datetime_fields, raw):
    assert collect_payload(datetime_fields, {'at': raw}) == {'at': raw}


def test_populate_example_numeric_value_is_not_a_datetime(datetime_fields):
    assert populate_example(datetime_fields, {'at': '37'}) == {'at': '37'}


def test_collect_payload_oversized_integer_falls_back_to_text(caplog: pytest.LogCaptureFixture):
    fields = describe_fields(PERSON_SCHEMA)
    digits = '9' * 5000
    assert collect_payload(fields, {'name': 'Ada', 'age': digits}) == {'name': 'Ada', 'age': digits}
    assert 'is not a valid integer' in caplog.text


@pytest.mark.parametrize(
    'raw', ['{"a": ' + '9' * 5000 + '}', '[' * 100000 + ']' * 100000]
)
def test_collect_payload_unloadable_json_falls_back_to_text(raw, caplog: pytest.LogCaptureFixture):
    fields = describe_fields({'properties': {'meta': {'type': 'object'}}})
    assert collect_payload(fields, {'meta': raw}) == {'meta': raw}
    assert 'does not contain valid JSON' in caplog.text


@pytest.mark.parametrize('raw', ['1e999', '-1e999', float('nan')])
def test_collect_payload_non_finite_number_falls_back(raw, caplog: pytest.LogCaptureFixture):
    fields = describe_fields({'properties': {'n': {'type': 'number'}}})
    assert collect_payload(fields, {'n': raw}) == {'n': raw}
    assert 'is not a valid number' in caplog.text


def test_collect_payload_non_finite_integer_falls_back(caplog: pytest.LogCaptureFixture):
    fields = describe_fields(PERSON_SCHEMA)
    payload = collect_payload(fields, {'age': float('inf')})
    assert payload == {'age': float('inf')}
    assert 'is not a valid integer' in caplog.text


# VIEWER CONFIG ##########


def test_form_accepts_viewer_config():
    config = TopologyViewerConfig(form=FormConfig(array_separator=',', json_indent=0))
    values = populate_example(describe_fields(ORDER_SCHEMA), ORDER_EXAMPLE, config)
    assert values['tags'] == 'gift,fragile'
    form = build_form(ORDER_SCHEMA, ORDER_EXAMPLE, config)
    assert form.values == values
