"""FastAPI dependency injection for the shared chat runtime components.

Usage in route handlers::

    @router.get("/diagnostics/state")
    async def state_info(chat_data: ChatData) -> dict:
        ...

Components are built once in the app lifespan and stored on ``app.state``.
Dependencies raise HTTP 503 if the backing service was not configured.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from chathub.chat_runtime.managers.chat_data import ChatDataStore


def get_chat_data(request: Request) -> ChatDataStore:
    """Return the shared chat data store."""
    chat_data: ChatDataStore | None = request.app.state.chat_data
    if chat_data is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat data store not configured.",
        )
    return chat_data


ChatData = Annotated[ChatDataStore, Depends(get_chat_data)]
"""Annotated dependency: shared chat data store."""
