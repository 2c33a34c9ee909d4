from fastapi import FastAPI, Body, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
import datetime
import logging

import anyio.to_thread

from config import AssistantConfig
from observability.prometheus_metrics import setup_prometheus_metrics
from . import __version__
from .assistant import AssistantResponse, DocAssistant
from .models import (
    AssistantReply,
    ChatRequest,
    CompletionReply,
    InvalidChatRequest,
    SearchHit,
    SearchRequest,
)
from .security import setup_cors

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%S") + "Z"


def get_assistant(request: Request) -> DocAssistant:
    """Dependency to get the shared assistant."""
    return request.app.state.assistant


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Sync handlers run on the AnyIO thread pool; its size bounds concurrent requests
    threads = app.state.config.server_threads
    anyio.to_thread.current_default_thread_limiter().total_tokens = threads
    logger.info(f"Request worker pool sized to {threads} thread(s)")
    yield
    logger.info("Documentation assistant API shut down")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse({"error": "Not found", "path": request.url.path}, status_code=404)
    if isinstance(exc.detail, dict):
        return JSONResponse(exc.detail, status_code=exc.status_code)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [error.get("msg", "invalid value") for error in exc.errors()]
    return JSONResponse({"error": "Invalid request body", "details": details}, status_code=400)


def _run_chat(payload: Dict[str, Any], assistant: DocAssistant) -> AssistantResponse:
    try:
        chat_request = ChatRequest.from_payload(payload)
    except InvalidChatRequest as e:
        logger.info(f"Rejected chat request: {e}")
        raise HTTPException(status_code=400, detail=e.to_dict())

    try:
        return assistant.chat(
            chat_request.message,
            history=chat_request.history,
            page_context=chat_request.page_context,
        )
    except Exception as e:
        logger.exception("Chat handling failed")
        raise HTTPException(status_code=500, detail=str(e))


def create_app(config: Optional[AssistantConfig] = None,
               assistant: Optional[DocAssistant] = None) -> FastAPI:
    """Build the API with an explicitly constructed assistant."""
    config = config or AssistantConfig.from_env()
    assistant = assistant or DocAssistant.from_config(config)

    app = FastAPI(title="Documentation Assistant API", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.assistant = assistant

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    setup_prometheus_metrics(app, version=__version__)
    # Outermost middleware, so OPTIONS never reaches routing
    setup_cors(app)

    @app.get("/")
    def root():
        """Root endpoint with API information."""
        return {
            "message": "Documentation Assistant API",
            "version": __version__,
            "chat": "/v1/chat",
            "search": "/v1/search",
            "health": "/health",
            "metrics": "/metrics"
        }

    @app.get("/health")
    @app.get("/v1/health")
    @app.get("/api/health")
    def health():
        return {"status": "healthy", "timestamp": _utc_timestamp()}

    @app.get("/health/ready")
    def readiness(assistant: DocAssistant = Depends(get_assistant)):
        """Report whether the generation service is reachable."""
        search = "enabled" if assistant.search_client.configured else "disabled"
        if assistant.generation_client.is_available():
            return {
                "status": "ready",
                "backend": "connected",
                "search": search,
                "timestamp": _utc_timestamp()
            }
        return JSONResponse(
            {
                "status": "degraded",
                "backend": "unavailable",
                "search": search,
                "timestamp": _utc_timestamp()
            },
            status_code=503
        )

    @app.post("/v1/chat")
    @app.post("/api/ai/chat")
    def chat(payload: Dict[str, Any] = Body(...), assistant: DocAssistant = Depends(get_assistant)):
        """Answer a documentation question."""
        result = _run_chat(payload, assistant)
        reply = AssistantReply(
            response=result.text,
            actions=result.actions,
            model=result.model,
            success=result.success,
            error=result.error,
        )
        return reply.model_dump(exclude_none=True)

    @app.post("/completion")
    def completion(payload: Dict[str, Any] = Body(...), assistant: DocAssistant = Depends(get_assistant)):
        """Generation-service compatible chat endpoint."""
        result = _run_chat(payload, assistant)
        return CompletionReply(content=result.text, model=result.model).model_dump()

    @app.post("/v1/search")
    @app.post("/api/search")
    def search(req: SearchRequest, assistant: DocAssistant = Depends(get_assistant)) -> List[Dict[str, Any]]:
        """Search the documentation index."""
        if not req.query.strip():
            raise HTTPException(status_code=400, detail="Query is required and must be a non-empty string")

        try:
            results = assistant.search_docs(req.query, req.max_results)
        except Exception as e:
            logger.exception("Documentation search failed")
            raise HTTPException(status_code=500, detail=str(e))

        return [
            SearchHit(title=r.title, url=r.url, snippet=r.content, score=r.relevance_score).model_dump()
            for r in results
        ]

    return app
