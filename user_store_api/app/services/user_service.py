"""
Business logic for user records.

Records are created lazily: the first read of an unknown id writes a
full default record, while the first update of an unknown id starts
from a bare ``{id, createdAt}`` stub.  Updates are shallow merges in
which ``id`` always comes from the path, never from the payload.
"""

import asyncio
import logging
from typing import Any, Dict, List

from ..core import storage
from ..schemas.user import UserRecord, utc_timestamp

logger = logging.getLogger(__name__)


def _get_or_create_sync(user_id: str) -> Dict[str, Any]:
    path = storage.user_file_path(user_id)
    if storage.document_exists(path):
        return storage.read_document(path)
    record = UserRecord.default_for(user_id).to_document()
    storage.write_document(path, record)
    logger.info("Created user %s with default profile", user_id)
    return record


def _merge_update_sync(user_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
    path = storage.user_file_path(user_id)
    if storage.document_exists(path):
        user = storage.read_document(path)
    else:
        user = {"id": user_id, "createdAt": utc_timestamp()}
    merged = {**user, **partial, "id": user_id}
    if "createdAt" in user:
        merged["createdAt"] = user["createdAt"]
    user = merged
    storage.write_document(path, user)
    logger.info("Updated user %s (%d field(s))", user_id, len(partial))
    return user


def _list_users_sync() -> List[Dict[str, Any]]:
    entries = storage.list_entries()
    # A single unreadable document fails the whole listing.
    return [storage.read_document(path) for path in storage.list_document_paths(entries)]


class UserService:
    """Service for reading, updating and listing user records."""

    @classmethod
    async def get_or_create(cls, user_id: str) -> Dict[str, Any]:
        """Return the stored record, creating a default one if absent.

        Raises
        ------
        StorageError
            If the document cannot be read, parsed or written.
        """
        return await asyncio.to_thread(_get_or_create_sync, user_id)

    @classmethod
    async def merge_update(cls, user_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        """Shallow-merge ``partial`` into the record and persist it.

        No field is validated.  ``id`` is forced back to ``user_id`` and
        an existing ``createdAt`` is kept even if ``partial`` carries one.
        """
        return await asyncio.to_thread(_merge_update_sync, user_id, dict(partial))

    @classmethod
    async def list_users(cls) -> List[Dict[str, Any]]:
        """Return every stored record in directory enumeration order."""
        users = await asyncio.to_thread(_list_users_sync)
        logger.debug("Listed %d user(s)", len(users))
        return users
