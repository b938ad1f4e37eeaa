"""
Admin endpoints.

Listing every user and broadcasting a message to all of them.  These
routes carry no authentication; "admin" is a naming convention only.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, status

from user_store_api.app.api.body import as_object
from user_store_api.app.core.errors import ApiError, StorageError, ValidationError
from user_store_api.app.schemas.user import BroadcastResult
from user_store_api.app.services.message_service import MessageService
from user_store_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/users", response_model=List[Dict[str, Any]], summary="List users")
async def list_users() -> List[Dict[str, Any]]:
    """List every stored user record.

    Order follows the storage directory and is not guaranteed.  A
    single unreadable record fails the whole request.
    """
    try:
        return await UserService.list_users()
    except StorageError:
        logger.exception("Failed to list users")
        raise ApiError("list-failed")


@router.post(
    "/broadcast",
    response_model=BroadcastResult,
    response_model_by_alias=True,
    summary="Broadcast a message",
)
async def broadcast(body: Any = Body(None)) -> BroadcastResult:
    """Append a message to every user's log.

    ``text`` is required; ``from`` defaults to ``"admin"``.
    """
    try:
        sent_to = await MessageService.broadcast(as_object(body))
    except ValidationError as e:
        raise ApiError(e.code, status_code=status.HTTP_400_BAD_REQUEST)
    except StorageError:
        logger.exception("Broadcast failed")
        raise ApiError("broadcast-failed")
    return BroadcastResult(sent_to=sent_to)
