"""
SQL filter descriptor.

Holds a SQL-like condition expression and its parameters for subscription
rules. The expression is only length-checked here; it is evaluated by the broker.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import errors, rules


class SqlFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    sql_expression: str
    parameters: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, sql_expression: Optional[str] = None, **data: Any):
        super().__init__(sql_expression=sql_expression, **data)

    @field_validator("sql_expression", mode="before")
    @classmethod
    def _check_expression(cls, value: Any) -> Any:
        if value is None or value == "":
            raise errors.argument_null("sql_expression")
        if isinstance(value, str) and len(value) > rules.MAXIMUM_SQL_FILTER_STATEMENT_LENGTH:
            raise errors.argument(
                "sql_expression",
                errors.format_for_user(
                    rules.SQL_FILTER_STATEMENT_TOO_LONG,
                    len(value),
                    rules.MAXIMUM_SQL_FILTER_STATEMENT_LENGTH,
                ),
            )
        return value

    def __str__(self) -> str:
        return f"SqlFilter: {self.sql_expression}"
