from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger

from chathub.chat_runtime.context import ChatRuntime, build_runtime
from chathub.chat_runtime.log import setup_logging
from chathub.chat_runtime.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, json=settings.log_json)

    logger.info(
        "Chat runtime starting (host={}, port={}, state={})",
        settings.host,
        settings.port,
        settings.state_backend,
    )

    runtime = build_runtime(settings)
    _attach(_app, runtime)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Chat runtime shutting down")
    await runtime.aclose()


def _attach(_app: FastAPI, runtime: ChatRuntime | None) -> None:
    """Expose the runtime and its components on ``app.state``."""
    _app.state.runtime = runtime
    _app.state.chat_data = runtime.chat_data if runtime is not None else None


app = FastAPI(title="Chathub Chat Runtime", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all backend endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from chathub.chat_runtime.routers.diagnostics import router as diagnostics_router  # noqa: E402

api.include_router(diagnostics_router)

app.include_router(api)
