"""FastAPI application entrypoint for dbusgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..introspect import IntrospectionError
from ..orchestrator import GenerationOutcome, Orchestrator
from ..printer import GenerationError


class GenerateRequest(BaseModel):
    documents: List[str] = Field(min_length=1)
    package: Optional[str] = None
    only: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    strip_prefix: Optional[str] = None


class GenerateResponse(BaseModel):
    package: str
    interfaces: List[str]
    source: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing binding generation."""

    app = FastAPI(title="dbusgen Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run_generate() -> GenerationOutcome:
            return orchestrator.generate(
                payload.documents,
                package=payload.package,
                only=payload.only,
                exclude=payload.exclude,
                strip_prefix=payload.strip_prefix,
            )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run_generate)
        return GenerateResponse(
            package=outcome.package,
            interfaces=outcome.interfaces,
            source=outcome.source,
        )

    @app.exception_handler(IntrospectionError)
    async def introspection_error_handler(_: Any, exc: IntrospectionError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Any, exc: GenerationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "line": exc.line, "text": exc.text},
        )

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
