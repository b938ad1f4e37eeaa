"""
Business logic for user message logs.

Messages are appended to the ``messages`` list embedded in each user
record.  A single message can be sent to one user, or a broadcast can
append the same message to every stored user.  Neither operation ever
removes or reorders existing messages.
"""

import asyncio
import logging
from typing import Any, Dict

from ..core import storage
from ..core.errors import StorageError, ValidationError
from ..schemas.user import Message, utc_timestamp

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST_SENDER = "admin"


def _append(user: Dict[str, Any], sender: Any, text: Any) -> Dict[str, Any]:
    messages = user.get("messages") or []
    if not isinstance(messages, list):
        raise StorageError(f"User {user.get('id')!r} has a non-list message log")
    user["messages"] = messages
    user["messages"].append(Message(sender=sender, text=text).to_document())
    return user["messages"][-1]


def _append_message_sync(user_id: str, sender: Any, text: Any) -> Dict[str, Any]:
    path = storage.user_file_path(user_id)
    if not storage.document_exists(path):
        # Stub differs from the default profile created on first read.
        storage.write_document(
            path, {"id": user_id, "messages": [], "coins": 0, "createdAt": utc_timestamp()}
        )
    user = storage.read_document(path)
    message = _append(user, sender, text)
    storage.write_document(path, user)
    return message


def _broadcast_sync(sender: Any, text: Any) -> int:
    entries = storage.list_entries()
    for path in storage.list_document_paths(entries):
        user = storage.read_document(path)
        _append(user, sender, text)
        storage.write_document(path, user)
    return len(entries)


class MessageService:
    """Service for appending messages to user records."""

    @classmethod
    async def append_message(cls, user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Append a message from ``body["from"]`` to the user's log.

        Creates a minimal record for an unknown id first.  Returns the
        appended message so the caller can echo it back.

        Raises
        ------
        ValidationError
            If ``from`` or ``text`` is missing or empty.
        StorageError
            If the record cannot be read or written.
        """
        sender = body.get("from")
        text = body.get("text")
        if not sender or not text:
            raise ValidationError("missing fields")
        message = await asyncio.to_thread(_append_message_sync, user_id, sender, text)
        logger.info("Message from %s appended to user %s", sender, user_id)
        return message

    @classmethod
    async def broadcast(cls, body: Dict[str, Any]) -> int:
        """Append the same message to every stored user.

        ``from`` defaults to ``"admin"`` when the key is absent.  Returns
        the number of entries found in the data directory.  A failure
        on any user aborts the rest; users already updated keep the
        message.
        """
        sender = body.get("from", DEFAULT_BROADCAST_SENDER)
        text = body.get("text")
        if not text:
            raise ValidationError("missing text")
        sent_to = await asyncio.to_thread(_broadcast_sync, sender, text)
        logger.info("Broadcast from %s sent to %d user(s)", sender, sent_to)
        return sent_to
