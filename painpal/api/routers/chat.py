# painpal/api/routers/chat.py
from typing import List
from fastapi import APIRouter, Depends, Query

from painpal import schemas
from painpal.api.deps import get_companion_service, get_storage
from painpal.core.security import get_current_user
from painpal.services.companion import CompanionService
from painpal.storage import Storage, DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/api/chat", tags=["Companion Chat"])


@router.get("/messages", response_model=List[schemas.ChatMessage])
def list_messages(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000),
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Get the most recent messages in chronological order."""
    return storage.list_chat_messages(current_user.id, limit=limit)


@router.post("", response_model=schemas.ChatMessage)
def send_message(
    message_in: schemas.ChatMessageCreate,
    current_user: schemas.User = Depends(get_current_user),
    companion: CompanionService = Depends(get_companion_service),
):
    """Send a message to Pal and get the companion's reply."""
    return companion.reply(current_user.id, message_in.content)
