"""
Player-facing user endpoints.

A user is addressed only by the id in the path.  Unknown ids are
created on first access, so none of these routes return 404.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, status

from user_store_api.app.api.body import as_object
from user_store_api.app.core.errors import ApiError, StorageError, ValidationError
from user_store_api.app.schemas.user import MessageAck
from user_store_api.app.services.message_service import MessageService
from user_store_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{user_id}", response_model=Dict[str, Any])
async def get_user(user_id: str) -> Dict[str, Any]:
    """Return the user record, creating a default profile if absent."""
    try:
        return await UserService.get_or_create(user_id)
    except StorageError:
        logger.exception("Failed to read user %s", user_id)
        raise ApiError("read-failed")


@router.post("/{user_id}", response_model=Dict[str, Any])
async def update_user(user_id: str, body: Any = Body(None)) -> Dict[str, Any]:
    """Shallow-merge the body into the user record.

    Any top-level key is accepted and stored as is; ``id`` in the
    body is ignored.
    """
    try:
        return await UserService.merge_update(user_id, as_object(body))
    except StorageError:
        logger.exception("Failed to update user %s", user_id)
        raise ApiError("write-failed")


@router.post("/{user_id}/message", response_model=MessageAck)
async def add_message(user_id: str, body: Any = Body(None)) -> MessageAck:
    """Append a message to the user's log.

    The body must contain non-empty ``from`` and ``text``.
    """
    try:
        message = await MessageService.append_message(user_id, as_object(body))
    except ValidationError as e:
        raise ApiError(e.code, status_code=status.HTTP_400_BAD_REQUEST)
    except StorageError:
        logger.exception("Failed to append message for user %s", user_id)
        raise ApiError("message-failed")
    return MessageAck(message=message)
