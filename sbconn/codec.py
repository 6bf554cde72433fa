"""
Connection string codec.

Text form: "Key=Value" pairs joined by ";". Keys are matched case-insensitively;
values may themselves contain "=". Canonical output order is Endpoint,
SharedAccessKeyName, SharedAccessKey, TransportType, then EntityPath for the
entity-scoped form. Unrecognized keys land in extra_properties and are not
written back out.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from . import errors, rules
from .models import ConnectionStringRecord, TransportType

logger = logging.getLogger(__name__)


def _set_endpoint(record: ConnectionStringRecord, value: str) -> None:
    record.endpoint = value


def _set_sas_key_name(record: ConnectionStringRecord, value: str) -> None:
    record.sas_key_name = value


def _set_sas_key(record: ConnectionStringRecord, value: str) -> None:
    record.sas_key = value


def _set_entity_path(record: ConnectionStringRecord, value: str) -> None:
    record.entity_path = value


def _set_transport_type(record: ConnectionStringRecord, value: str) -> None:
    transport_type = TransportType.try_parse(value)
    if transport_type is None:
        # Unknown transports keep the current value instead of failing the parse
        logger.debug(
            "Ignoring unrecognized transport type %r",
            value,
            extra={"transport_type": record.transport_type.value},
        )
        return
    record.transport_type = transport_type


_FIELD_SETTERS: Dict[str, Callable[[ConnectionStringRecord, str], None]] = {
    rules.ENDPOINT_CONFIG_NAME.lower(): _set_endpoint,
    rules.SHARED_ACCESS_KEY_NAME_CONFIG_NAME.lower(): _set_sas_key_name,
    rules.SHARED_ACCESS_KEY_CONFIG_NAME.lower(): _set_sas_key,
    rules.ENTITY_PATH_CONFIG_NAME.lower(): _set_entity_path,
    rules.TRANSPORT_TYPE_CONFIG_NAME.lower(): _set_transport_type,
}


def _set_extra_property(properties: Dict[str, str], key: str, value: str) -> None:
    # Overwrites keep the casing of the first occurrence.
    wanted = key.lower()
    for existing in properties:
        if existing.lower() == wanted:
            properties[existing] = value
            return
    properties[key] = value


def parse(connection_string: Optional[str]) -> ConnectionStringRecord:
    """
    Parse a connection string into a new record.

    Blank input yields an empty record. The record is only returned once every
    segment has been applied; a malformed segment raises MalformedInputError and
    nothing is returned.
    """
    record = ConnectionStringRecord()
    if connection_string is None or not connection_string.strip():
        return record

    for segment in connection_string.split(rules.KEY_VALUE_PAIR_DELIMITER):
        if not segment:
            continue

        key, separator, value = segment.partition(rules.KEY_VALUE_SEPARATOR)
        if not separator:
            raise errors.malformed_segment("connection_string", key)

        value = value.strip()
        setter = _FIELD_SETTERS.get(key.lower())
        if setter is not None:
            setter(record, value)
        else:
            _set_extra_property(record.extra_properties, key, value)

    logger.debug(
        "Parsed connection string",
        extra={
            "has_endpoint": record.endpoint is not None,
            "has_entity_path": bool(record.entity_path),
            "transport_type": record.transport_type.value,
            "extra_property_count": len(record.extra_properties),
        },
    )
    return record


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _join(pairs: List[Tuple[str, str]]) -> str:
    return rules.KEY_VALUE_PAIR_DELIMITER.join(
        f"{key}{rules.KEY_VALUE_SEPARATOR}{value}" for key, value in pairs
    )


def _namespace_pairs(record: ConnectionStringRecord) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    if record.endpoint is not None:
        pairs.append((rules.ENDPOINT_CONFIG_NAME, record.endpoint))
    if not _is_blank(record.sas_key_name):
        pairs.append((rules.SHARED_ACCESS_KEY_NAME_CONFIG_NAME, record.sas_key_name))
    if not _is_blank(record.sas_key):
        pairs.append((rules.SHARED_ACCESS_KEY_CONFIG_NAME, record.sas_key))
    if record.transport_type != TransportType.default():
        pairs.append((rules.TRANSPORT_TYPE_CONFIG_NAME, record.transport_type.value))

    if record.extra_properties:
        logger.debug(
            "Extra properties are not serialized",
            extra={"dropped_keys": sorted(record.extra_properties)},
        )
    return pairs


def namespace_connection_string(record: ConnectionStringRecord) -> str:
    """Namespace-scoped form: everything except EntityPath."""
    return _join(_namespace_pairs(record))


def entity_connection_string(record: ConnectionStringRecord) -> str:
    """Entity-scoped form: the namespace form followed by EntityPath."""
    if _is_blank(record.entity_path):
        raise errors.argument_null_or_white_space("entity_path")

    pairs = _namespace_pairs(record)
    pairs.append((rules.ENTITY_PATH_CONFIG_NAME, record.entity_path))
    return _join(pairs)


def serialize(record: ConnectionStringRecord) -> str:
    if _is_blank(record.entity_path):
        return namespace_connection_string(record)
    return entity_connection_string(record)
