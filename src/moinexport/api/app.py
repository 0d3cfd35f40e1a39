"""FastAPI application serving MoinMoin exports of pads."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .. import __version__
from ..errors import NotFound, RevisionUnavailable
from ..service import convert


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with store and export options
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="moinexport",
        description="Etherpad to MoinMoin export",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    async def export(pad_id: str, rev: str | None) -> PlainTextResponse:
        try:
            markup = await convert(runtime.store, pad_id, rev, runtime.options)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except RevisionUnavailable as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return PlainTextResponse(markup)

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.get("/p/{pad_id}/export/moinmoin", response_class=PlainTextResponse)
    async def export_pad(pad_id: str, auth: None = Depends(verify_token)) -> PlainTextResponse:
        """Export the latest revision of a pad."""
        return await export(pad_id, None)

    @app.get("/p/{pad_id}/{rev}/export/moinmoin", response_class=PlainTextResponse)
    async def export_revision(
        pad_id: str, rev: str, auth: None = Depends(verify_token)
    ) -> PlainTextResponse:
        """Export a specific revision of a pad."""
        return await export(pad_id, rev)

    @app.get("/pads")
    async def pads(auth: None = Depends(verify_token)) -> list[str]:
        """List pad ids known to the store."""
        return list(runtime.store.list_pads())

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
