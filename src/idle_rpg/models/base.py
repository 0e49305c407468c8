"""Shared pydantic base for models exchanged with the browser client.

The client speaks camelCase JSON while the Python side uses snake_case
attributes; ``ApiModel`` bridges the two with an alias generator.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


class ApiModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
    )

    def to_api(self) -> dict[str, Any]:
        """Dump the model as JSON-compatible data using client field names.

        Returns:
            Dictionary ready to be placed in a response envelope.
        """
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["ApiModel", "utcnow"]
