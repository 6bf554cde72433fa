from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from . import errors, rules
from .normalize import normalize_endpoint, normalize_simple_field


class TransportType(str, Enum):
    AMQP = "Amqp"
    AMQP_WEB_SOCKETS = "AmqpWebSockets"

    @classmethod
    def default(cls) -> "TransportType":
        return cls.AMQP

    @classmethod
    def try_parse(cls, text: Optional[str]) -> Optional["TransportType"]:
        """Match a transport name case-insensitively; None when nothing matches."""
        if text is None:
            return None
        wanted = text.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class ConnectionStringRecord(BaseModel):
    """
    Connectivity fields of a Service Bus connection string.

    Every scalar field is normalized when it is assigned, whether through the
    constructor, attribute assignment, or parsing.
    """

    model_config = ConfigDict(validate_assignment=True)

    endpoint: Optional[str] = None
    entity_path: Optional[str] = None
    sas_key_name: Optional[str] = None
    sas_key: Optional[str] = Field(default=None, repr=False)
    transport_type: TransportType = TransportType.AMQP
    # Accepted on parse but never written back out by the codec.
    extra_properties: Dict[str, str] = Field(default_factory=dict)

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, value: Optional[str]) -> str:
        return normalize_endpoint(value)

    @field_validator("entity_path", "sas_key_name", "sas_key")
    @classmethod
    def _normalize_simple(cls, value: Optional[str], info: ValidationInfo) -> str:
        return normalize_simple_field(value, info.field_name)

    @field_validator("extra_properties")
    @classmethod
    def _reject_recognized_keys(cls, value: Dict[str, str]) -> Dict[str, str]:
        recognized = {k.lower() for k in rules.RECOGNIZED_KEYS}
        for key in value:
            if key.lower() in recognized:
                raise errors.argument(
                    "extra_properties", errors.format_for_user(rules.RESERVED_EXTRA_PROPERTY, key)
                )
        return value

    @classmethod
    def create(
        cls,
        endpoint: str,
        entity_path: Optional[str],
        sas_key_name: str,
        sas_key: str,
        transport_type: TransportType = TransportType.AMQP,
    ) -> "ConnectionStringRecord":
        """Build a record from its parts; endpoint and both credentials are required."""
        if endpoint is None or not endpoint.strip():
            raise errors.argument_null_or_white_space("endpoint")
        for name, value in (("sas_key_name", sas_key_name), ("sas_key", sas_key)):
            if value is None or not value.strip():
                raise errors.argument_null_or_white_space(name)

        fields: Dict[str, Any] = {
            "endpoint": endpoint,
            "sas_key_name": sas_key_name,
            "sas_key": sas_key,
            "transport_type": transport_type,
        }
        if entity_path is not None:
            fields["entity_path"] = entity_path
        return cls(**fields)

    @classmethod
    def from_connection_string(cls, connection_string: Optional[str]) -> "ConnectionStringRecord":
        from .codec import parse

        return parse(connection_string)

    def get_extra_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.extra_properties.items():
            if key.lower() == wanted:
                return value
        return default

    def namespace_connection_string(self) -> str:
        from .codec import namespace_connection_string

        return namespace_connection_string(self)

    def entity_connection_string(self) -> str:
        from .codec import entity_connection_string

        return entity_connection_string(self)

    def __str__(self) -> str:
        from .codec import serialize

        return serialize(self)


# --- API envelopes ---


class ParseRequest(BaseModel):
    connection_string: str


class RecordView(BaseModel):
    endpoint: Optional[str] = None
    entity_path: Optional[str] = None
    sas_key_name: Optional[str] = None
    sas_key: Optional[str] = None
    transport_type: TransportType = TransportType.AMQP
    extra_properties: Dict[str, str] = Field(default_factory=dict)


class DecodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class ParseResponse(BaseModel):
    record: RecordView
    connection_string: str
    decoding: Optional[DecodingReport] = None


class SerializeRequest(BaseModel):
    endpoint: Optional[str] = None
    entity_path: Optional[str] = None
    sas_key_name: Optional[str] = None
    sas_key: Optional[str] = None
    transport_type: TransportType = TransportType.AMQP


class SerializeResponse(BaseModel):
    connection_string: str


class SqlFilterRequest(BaseModel):
    sql_expression: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class SqlFilterResponse(BaseModel):
    sql_expression: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    description: str


class HealthResponse(BaseModel):
    ok: bool = True
