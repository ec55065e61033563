# painpal/api/deps.py
from fastapi import Depends, Request

from painpal.storage import Storage
from painpal.services.companion import CompanionService, CompletionClient


def get_storage(request: Request) -> Storage:
    """Storage backend chosen at startup and attached to the app."""
    return request.app.state.storage


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_companion_service(
    storage: Storage = Depends(get_storage),
    client: CompletionClient = Depends(get_completion_client),
) -> CompanionService:
    return CompanionService(storage=storage, client=client)
