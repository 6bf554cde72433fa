"""
Error types raised by the codec and the filter type.

These do not derive from ValueError: pydantic wraps ValueError raised inside a
validator into a ValidationError, while any other exception propagates as is.
"""

from __future__ import annotations

from typing import Optional

from . import rules


class ConnectionStringError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(ConnectionStringError):
    def __init__(self, message: str, param_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.param_name = param_name

    def __str__(self) -> str:
        if self.param_name:
            return f"{self.message} (Parameter '{self.param_name}')"
        return self.message


class MalformedInputError(InvalidArgumentError):
    """A connection string segment had no key/value separator."""

    def __init__(self, message: str, key: str, param_name: Optional[str] = None):
        super().__init__(message, param_name)
        self.key = key


def format_for_user(template: str, *args) -> str:
    """
    Fill a message template with positional values.

    Numbers are rendered with plain str(), so output never depends on the
    process locale.
    """
    return template.format(*(str(a) for a in args))


def argument(param_name: str, message: str) -> InvalidArgumentError:
    return InvalidArgumentError(message, param_name)


def argument_null(param_name: str) -> InvalidArgumentError:
    return InvalidArgumentError(format_for_user(rules.ARGUMENT_NULL, param_name), param_name)


def argument_null_or_white_space(param_name: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        format_for_user(rules.ARGUMENT_NULL_OR_WHITE_SPACE, param_name), param_name
    )


def malformed_segment(param_name: str, key: str) -> MalformedInputError:
    return MalformedInputError(
        format_for_user(rules.VALUE_NOT_FOUND_FOR_KEY, key), key=key, param_name=param_name
    )
