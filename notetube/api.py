"""NoteTube HTTP API — FastAPI endpoint.

Usage:
    uvicorn notetube.api:app --port 8080

Settings and the completion client are built once when the app starts; a
missing API key stops startup instead of failing the first request.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .completion import CompletionClient, OpenAICompletionClient
from .config import Settings, load_settings
from .errors import ErrorKind, NoteTubeError
from .schemas import NotesRequest, NotesResponse
from .service import generate_notes

_STATUS_BY_KIND = {
    ErrorKind.INVALID_REFERENCE: 400,
    ErrorKind.NO_CAPTIONS: 422,
    ErrorKind.EXTRACTION_FAILED: 502,
    ErrorKind.GENERATION_FAILED: 502,
    ErrorKind.CONFIGURATION: 500,
}


def create_app(settings: Settings | None = None, client: CompletionClient | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings or load_settings()
        app.state.client = client or OpenAICompletionClient.from_settings(app.state.settings)
        yield

    app = FastAPI(title="NoteTube", version="0.1.0", lifespan=lifespan)

    @app.exception_handler(NoteTubeError)
    async def notetube_error(request: Request, exc: NoteTubeError) -> JSONResponse:
        return JSONResponse(
            status_code=_STATUS_BY_KIND.get(exc.kind, 500),
            content={"error": exc.message, "kind": exc.kind.value},
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/generate-notes", response_model=NotesResponse)
    def create_notes(req: NotesRequest, request: Request):
        result = generate_notes(
            req.url,
            req.intent,
            req.content_type,
            client=request.app.state.client,
            settings=request.app.state.settings,
        )
        return NotesResponse(
            notes=result.text,
            intent=result.intent,
            format=result.format,
            fallback_used=result.fallback_used,
        )

    return app


app = create_app()
