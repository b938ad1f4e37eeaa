"""
Pydantic models for user records and their messages.

A stored user record is an open mapping: the fields below carry
defaults and meaning, but any extra key supplied through an update is
kept as is.  The models are used to build new records and messages in
their wire shape (``createdAt``, ``from``); stored documents are
handled as plain dictionaries so that unknown keys and caller supplied
values round-trip untouched.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Message(BaseModel):
    """A single entry in a user's message log."""

    model_config = ConfigDict(populate_by_name=True)

    sender: Any = Field(..., alias="from", examples=["admin"])
    text: Any = Field(..., examples=["Welcome aboard!"])
    date: str = Field(default_factory=utc_timestamp)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class UserRecord(BaseModel):
    """Full default record produced on first read of an unknown id."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    username: str
    coins: int = 0
    level: int = 1
    messages: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_timestamp, alias="createdAt")

    @classmethod
    def default_for(cls, user_id: str) -> "UserRecord":
        return cls(id=user_id, username=f"user_{user_id}")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class MessageAck(BaseModel):
    """Response for a message appended to one user."""

    ok: bool = True
    message: Dict[str, Any]


class BroadcastResult(BaseModel):
    """Response for a broadcast to every user."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    sent_to: int = Field(..., alias="sentTo")
