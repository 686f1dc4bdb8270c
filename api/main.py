"""FastAPI application serving Twenty-One over HTTP."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import game
from api.session import get_session_store
from config import config
from core.cards import EmptyDeckError

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


async def _too_many_requests(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(status_code=429, content={"detail": f"Rate limit exceeded: {exc.detail}"})


async def _deck_exhausted(request: Request, exc: EmptyDeckError) -> JSONResponse:
    # A fresh deck per round cannot run out; reaching here means a broken invariant
    logger.error("Deck exhausted while serving %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Deck exhausted"})


app = FastAPI(
    title="Twenty-One",
    description="Play Twenty-One against a threshold-driven dealer",
    version="0.1.0",
    debug=config.debug,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _too_many_requests)
app.add_exception_handler(EmptyDeckError, _deck_exhausted)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str | int]:
    """Liveness probe with the number of open sessions."""
    return {"status": "healthy", "sessions": len(get_session_store())}


app.include_router(game.router, prefix="/api/game", tags=["game"])
