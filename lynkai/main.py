"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from lynkai.api.v1 import router as v1_router
from lynkai.api.v1.deps import get_dispatcher, get_token_codec
from lynkai.api.v1.identity import is_public_path, resolve_identity
from lynkai.core.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    # Let queued verification mails finish before the worker exits.
    get_dispatcher().shutdown(wait=True)
    get_dispatcher.cache_clear()


app = FastAPI(
    title="Lynkai API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def attach_identity(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Resolve the bearer access token into request.state.identity.

    Never rejects: endpoints that need a caller depend on require_identity.
    """
    request.state.identity = None
    if not is_public_path(request.url.path, settings.API_V1_PREFIX):
        request.state.identity = resolve_identity(
            request.headers.get("Authorization"), get_token_codec()
        )
    return await call_next(request)


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Lynkai API"}
