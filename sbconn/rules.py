"""
Connection string rules.

Fixed key names, separators and limits shared by the codec and the filter type.
"""

KEY_VALUE_SEPARATOR = "="
KEY_VALUE_PAIR_DELIMITER = ";"
ENDPOINT_SCHEME = "amqps"  # used when the endpoint has no scheme of its own

ENDPOINT_CONFIG_NAME = "Endpoint"
SHARED_ACCESS_KEY_NAME_CONFIG_NAME = "SharedAccessKeyName"
SHARED_ACCESS_KEY_CONFIG_NAME = "SharedAccessKey"
ENTITY_PATH_CONFIG_NAME = "EntityPath"
TRANSPORT_TYPE_CONFIG_NAME = "TransportType"

RECOGNIZED_KEYS = (
    ENDPOINT_CONFIG_NAME,
    SHARED_ACCESS_KEY_NAME_CONFIG_NAME,
    SHARED_ACCESS_KEY_CONFIG_NAME,
    ENTITY_PATH_CONFIG_NAME,
    TRANSPORT_TYPE_CONFIG_NAME,
)

MAXIMUM_SQL_FILTER_STATEMENT_LENGTH = 1024

# User-facing message templates, filled positionally by errors.format_for_user
ENDPOINT_NOT_FULLY_QUALIFIED = "Endpoint should be fully qualified endpoint"
VALUE_NOT_FOUND_FOR_KEY = "Value for the connection string parameter name '{0}' was not found."
ARGUMENT_NULL = "Value cannot be null. Parameter name: {0}"
ARGUMENT_NULL_OR_WHITE_SPACE = "The argument {0} is null or white space."
SQL_FILTER_STATEMENT_TOO_LONG = (
    "The specified SQL filter statement length {0} exceeds the maximum allowed length {1}."
)
RESERVED_EXTRA_PROPERTY = "'{0}' is a recognized connection string key and cannot be an extra property."
