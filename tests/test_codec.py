import pytest

from sbconn import codec
from sbconn.errors import InvalidArgumentError, MalformedInputError
from sbconn.models import ConnectionStringRecord, TransportType

ENDPOINT = "contoso.servicebus.windows.net"


def test_parse_routes_recognized_keys():
    record = codec.parse(
        "Endpoint=sb://contoso.servicebus.windows.net;SharedAccessKeyName= Root ;"
        "SharedAccessKey=secret;EntityPath= orders ;TransportType=AmqpWebSockets"
    )
    assert record.endpoint == "sb://contoso.servicebus.windows.net"
    assert record.sas_key_name == "Root"
    assert record.sas_key == "secret"
    assert record.entity_path == "orders"
    assert record.transport_type is TransportType.AMQP_WEB_SOCKETS
    assert record.extra_properties == {}


@pytest.mark.parametrize("key", ["Endpoint", "endpoint", "ENDPOINT", "eNdPoInT"])
def test_parse_keys_case_insensitive(key):
    record = codec.parse(f"{key}={ENDPOINT}")
    assert record.endpoint == "amqps://contoso.servicebus.windows.net"


def test_parse_keeps_explicit_scheme():
    assert codec.parse(f"Endpoint=sb://{ENDPOINT}").endpoint == f"sb://{ENDPOINT}"
    assert codec.parse(f"Endpoint={ENDPOINT}").endpoint == f"amqps://{ENDPOINT}"


def test_parse_value_splits_on_first_equals_only():
    record = codec.parse("Foo=a=b=c")
    assert record.extra_properties == {"Foo": "a=b=c"}


def test_parse_tolerates_empty_segments():
    messy = codec.parse(f"Endpoint={ENDPOINT};;SharedAccessKeyName=Foo;")
    clean = codec.parse(f"Endpoint={ENDPOINT};SharedAccessKeyName=Foo")
    assert messy == clean


def test_parse_unknown_transport_keeps_default():
    record = codec.parse("TransportType=NotARealValue")
    assert record.transport_type is TransportType.AMQP


def test_parse_unknown_transport_keeps_previous_value():
    record = codec.parse("TransportType=amqpwebsockets;TransportType=Bogus")
    assert record.transport_type is TransportType.AMQP_WEB_SOCKETS


def test_parse_malformed_segment():
    with pytest.raises(MalformedInputError) as exc_info:
        codec.parse("JustAKeyNoEquals;Endpoint=x.y")
    assert exc_info.value.key == "JustAKeyNoEquals"
    assert "JustAKeyNoEquals" in str(exc_info.value)
    assert isinstance(exc_info.value, InvalidArgumentError)


def test_parse_endpoint_without_dot_fails():
    with pytest.raises(InvalidArgumentError):
        codec.parse("Endpoint=localhost")


def test_parse_extra_properties_last_write_wins():
    record = codec.parse("Foo=1;FOO=2;Bar=x")
    assert record.extra_properties == {"Foo": "2", "Bar": "x"}
    assert record.get_extra_property("foo") == "2"
    assert record.get_extra_property("missing") is None


def test_parse_duplicate_recognized_key_last_wins():
    record = codec.parse("EntityPath=a;entitypath=b")
    assert record.entity_path == "b"


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_blank_gives_empty_record(text):
    assert codec.parse(text) == ConnectionStringRecord()


def test_serialize_order_and_omissions():
    record = ConnectionStringRecord(
        entity_path="orders",
        sas_key="secret",
        sas_key_name="Root",
        endpoint=ENDPOINT,
        extra_properties={"OperationTimeout": "30"},
    )
    assert str(record) == (
        "Endpoint=amqps://contoso.servicebus.windows.net;"
        "SharedAccessKeyName=Root;SharedAccessKey=secret;EntityPath=orders"
    )
    assert record.namespace_connection_string() == (
        "Endpoint=amqps://contoso.servicebus.windows.net;"
        "SharedAccessKeyName=Root;SharedAccessKey=secret"
    )


def test_serialize_skips_blank_credentials():
    record = ConnectionStringRecord(endpoint=ENDPOINT, sas_key_name="   ", sas_key="")
    assert codec.serialize(record) == "Endpoint=amqps://contoso.servicebus.windows.net"


def test_serialize_non_default_transport():
    record = ConnectionStringRecord(transport_type=TransportType.AMQP_WEB_SOCKETS)
    assert codec.serialize(record) == "TransportType=AmqpWebSockets"


def test_serialize_empty_record():
    assert codec.serialize(ConnectionStringRecord()) == ""


def test_entity_connection_string_requires_entity_path():
    record = ConnectionStringRecord(endpoint=ENDPOINT)
    with pytest.raises(InvalidArgumentError) as exc_info:
        record.entity_connection_string()
    assert exc_info.value.param_name == "entity_path"

    record.entity_path = "   "
    with pytest.raises(InvalidArgumentError):
        codec.entity_connection_string(record)


def test_entity_connection_string_without_namespace_fields():
    record = ConnectionStringRecord(entity_path="orders")
    assert codec.entity_connection_string(record) == "EntityPath=orders"


def test_round_trip():
    record = ConnectionStringRecord(
        endpoint=f"sb://{ENDPOINT}",
        entity_path="orders",
        sas_key_name="Root",
        sas_key="abc123==",
        transport_type=TransportType.AMQP_WEB_SOCKETS,
    )
    assert codec.parse(codec.serialize(record)) == record


def test_round_trip_drops_extra_properties():
    record = codec.parse(f"Endpoint={ENDPOINT};Custom=1")
    reparsed = codec.parse(str(record))
    assert reparsed.extra_properties == {}
    assert reparsed.endpoint == record.endpoint


def test_from_connection_string():
    record = ConnectionStringRecord.from_connection_string(f"Endpoint={ENDPOINT}")
    assert record.endpoint == f"amqps://{ENDPOINT}"
