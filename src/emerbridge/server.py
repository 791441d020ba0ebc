"""FastAPI dispatcher in front of the pipeline.

Routes HTTP requests onto ``InvocationRequest`` values and serializes each
``PipelineResult`` variant. No process work happens here.
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
from typing import Annotated, Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from emerbridge import __version__
from emerbridge.constants import MAX_BODY_BYTES, SERVICE_NAME
from emerbridge.endpoints import ENDPOINTS, by_category
from emerbridge.errors import ConfigurationError
from emerbridge.options import Options
from emerbridge.pipeline import Pipeline, create_pipeline
from emerbridge.request import normalize_request
from emerbridge.result import (
    PipelineFailure,
    PipelineResult,
    RawText,
    StructuredValue,
    SuccessSentinel,
    is_success,
)

log = logging.getLogger(__name__)


class RpcBody(BaseModel):
    """JSON body accepted by every command route."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    #: Only read by the legacy ``POST /rpc`` route.
    method: str | None = None
    params: list[Any] | None = None
    format: bool = False
    extract_value: bool = Field(default=False, alias="extractValue")


OptionalBody = Annotated[RpcBody | None, Body()]


class RequestBodyTooLarge(HTTPException):
    """Raised from the receive channel once a body passes the size limit."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            status_code=413, detail=f"Request body exceeds {max_bytes} bytes"
        )


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_bytes`` with 413.

    A declared Content-Length is checked before the app runs. Bodies without
    one (chunked uploads) are counted as they are received.
    """

    def __init__(self, app: ASGIApp, *, max_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_bytes:
            error = RequestBodyTooLarge(self.max_bytes)
            response = JSONResponse(status_code=413, content={"error": error.detail})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise RequestBodyTooLarge(self.max_bytes)
            return message

        await self.app(scope, limited_receive, send)


def render_result(method: str, result: PipelineResult) -> JSONResponse:
    """Serialize a PipelineResult into the wire response."""
    payload: Any
    match result:
        case PipelineFailure(message=message, stderr=stderr, exit_code=code):
            return JSONResponse(
                status_code=500,
                content={"error": message, "stderr": stderr or None, "code": code},
            )
        case StructuredValue(value=value):
            payload = value
        case RawText(text=text):
            payload = text
        case SuccessSentinel():
            payload = {"success": True}
    return JSONResponse(content={"method": method, "result": payload})


async def _dispatch(pipeline: Pipeline, method: str, body: RpcBody | None) -> JSONResponse:
    body = body or RpcBody()
    try:
        request = normalize_request(
            method,
            body.params,
            options=Options(format=body.format, extract_value=body.extract_value),
        )
    except ConfigurationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    result = await pipeline.execute(request)
    if is_success(result):
        log.info("%s -> %s", method, type(result).__name__)
    else:
        log.warning("%s failed: %s", method, result.message)
    return render_result(method, result)


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": __version__,
            "timestamp": datetime.now(UTC).isoformat(),
            "endpoints": len(ENDPOINTS),
        }

    @app.get("/endpoints")
    async def list_endpoints() -> dict[str, list[dict[str, object]]]:
        return by_category()

    @app.post("/rpc/{method}")
    async def rpc_method(method: str, request: Request, body: OptionalBody = None) -> JSONResponse:
        if method not in ENDPOINTS:
            return JSONResponse(
                status_code=404,
                content={"error": f"Unknown method: {method}", "available": list(ENDPOINTS)},
            )
        return await _dispatch(request.app.state.pipeline, method, body)

    @app.post("/rpc")
    async def rpc_passthrough(request: Request, body: OptionalBody = None) -> JSONResponse:
        method = body.method if body is not None else None
        if not method:
            return JSONResponse(status_code=400, content={"error": "Method is required"})
        return await _dispatch(request.app.state.pipeline, method, body)

    for method, endpoint in ENDPOINTS.items():
        app.add_api_route(
            f"/{endpoint.category}/{method}",
            _category_handler(method),
            methods=["POST"],
            name=method,
            tags=[endpoint.category],
        )


def _category_handler(method: str) -> Any:
    async def handler(request: Request, body: OptionalBody = None) -> JSONResponse:
        return await _dispatch(request.app.state.pipeline, method, body)

    handler.__name__ = f"call_{method}"
    return handler


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestBodyTooLarge)
    async def body_too_large(request: Request, exc: RequestBodyTooLarge) -> JSONResponse:
        log.warning("Rejected oversized body on %s", request.url.path)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        log.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )


def create_app(pipeline: Pipeline | None = None) -> FastAPI:
    """Return a configured FastAPI application.

    Without an explicit pipeline, one is built from ``Config.from_env()``.
    """
    pipeline = pipeline or create_pipeline()

    app = FastAPI(title=SERVICE_NAME, version=__version__)
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(BodySizeLimitMiddleware)

    _register_routes(app)
    _register_exception_handlers(app)
    return app
