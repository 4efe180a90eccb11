"""
Base class for event payloads.

Handlers conventionally receive ``(sender, args)``: the object that raised
the event and an immutable payload describing what happened. EventArgs is
the base for such payloads.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventArgs(BaseModel):
    """
    Immutable event payload with automatic event_type derivation.

    Attributes:
        event_id: Unique identifier for this payload instance
        event_type: Type name of the payload (class name unless set explicitly)
        occurred_at: When the event occurred (UTC timestamp)
        metadata: Additional metadata dictionary

    Example:
        >>> class DocumentSaved(EventArgs):
        ...     path: str
        ...
        >>> args = DocumentSaved(path="notes.txt")
        >>> assert args.event_type == "DocumentSaved"
        >>> document.saved.emit(document, args)
    """

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier",
    )
    event_type: str = Field(
        default="",
        description="Type of event (derived from class name if not set)",
    )
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When event occurred (UTC)",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event metadata",
    )

    @model_validator(mode="before")
    @classmethod
    def _ensure_event_type(cls, data: Any) -> Any:
        """
        Fill event_type with the class name when neither the input nor the
        subclass default provides one.
        """
        if isinstance(data, dict) and not data.get("event_type"):
            field_info = cls.model_fields.get("event_type")
            field_default = field_info.default if field_info else ""
            if not field_default or data.get("event_type") == "":
                data = dict(data)
                data["event_type"] = cls.__name__
        return data

    def with_metadata(self, **kwargs: Any) -> Self:
        """
        Create a copy of this payload with additional metadata.

        Args:
            **kwargs: Key-value pairs to add to metadata

        Returns:
            New payload instance with updated metadata
        """
        new_metadata = {**self.metadata, **kwargs}
        return self.model_copy(update={"metadata": new_metadata})

    def __str__(self) -> str:
        return f"{self.event_type}(event_id={self.event_id})"


__all__ = ["EventArgs"]
