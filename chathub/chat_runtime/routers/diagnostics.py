"""Diagnostics endpoints.

Thin HTTP adapter over the shared chat data store.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from chathub.chat_runtime.deps import ChatData
from chathub.chat_runtime.store.base import StateStoreError

router = APIRouter(prefix="/diagnostics", tags=["diagnostics"])


@router.get("/state")
async def state_info(chat_data: ChatData) -> dict:
    """Report the approximate key count of the shared state namespace.

    The count covers every key in the namespace, not only chat data.
    """
    try:
        keys = await chat_data.size()
    except StateStoreError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from None
    return {"keys": keys, "approximate": True}
