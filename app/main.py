"""
PORTFOLIO ASSISTANT MAIN API
============================

This module defines the FastAPI application and all HTTP endpoints used by
the portfolio frontend: the chat widget and the "performance optimization"
demo panels.

ENDPOINTS:
  GET  /        - Returns API name and list of endpoints.
  GET  /health  - Returns status of all services (for monitoring).
  POST /chat    - Classifies the message and answers from the Knowledge Base.
  POST /demo    - Runs one demo kernel, chosen by the body's `type`
                  (caching | search | batch | realtime).

ERRORS:
  Every failure answers {"success": false, "error": ...}: 400 for invalid input
  or an unknown demo type (which is echoed back as receivedType), 500 with a
  generic message for anything unexpected. A failed request never leaves the
  shared cache or index in a broken state.

STARTUP:
  The lifespan function builds the services once: Knowledge Base, classifier,
  response generator, log corpus + inverted index, cache store, batch and
  delivery kernels. They live on app.state and are handed to the routes; there
  is no module-level mutable state. create_app(services=...) lets tests inject
  their own (fresh state, manual clock, no delays).
"""

import logging
import random
from contextlib import asynccontextmanager
from typing import Any, Dict, NamedTuple, Optional

import uvicorn
from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from app.errors import PortfolioError, UnknownDiscriminant
from app.knowledge_base import load_knowledge_base
from app.models import ChatRequest, ChatResponse, ErrorResponse
from app.services.batch_kernel import BatchKernel
from app.services.cache_kernel import CacheKernel
from app.services.chat_service import ChatService
from app.services.delivery_kernel import DeliveryKernel
from app.services.demo_service import DemoService
from app.services.index_kernel import IndexKernel
from app.services.intent_classifier import IntentClassifier
from app.services.response_generator import ResponseGenerator
from app.utils.clock import SystemClock


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("portfolio")

CHAT_FAILURE_MESSAGE = "Failed to process request"
DEMO_FAILURE_MESSAGE = "Demo failed"


class Services(NamedTuple):
    chat: ChatService
    demo: DemoService


def build_services(clock=None, seed: Optional[int] = None) -> Services:
    """
    Build every service from config. The log corpus uses LOG_CORPUS_SEED so it
    is reproducible; `seed` additionally seeds the latency samplers.
    """
    clock = clock or SystemClock(enabled=config.SIMULATE_LATENCY, scale=config.LATENCY_SCALE)
    rng = random.Random(seed)

    logger.info("Loading knowledge base...")
    knowledge_base = load_knowledge_base()
    chat = ChatService(
        classifier=IntentClassifier(),
        generator=ResponseGenerator(knowledge_base),
        clock=clock,
        model_identifier=config.MODEL_IDENTIFIER,
        history_window=config.CHAT_HISTORY_WINDOW,
        max_message_length=config.MAX_MESSAGE_LENGTH,
        simulate_delay=config.SIMULATE_LATENCY,
        rng=rng,
    )
    logger.info("Chat service initialized successfully")

    logger.info("Building log corpus and inverted index (%d lines)...", config.LOG_CORPUS_SIZE)
    demo = DemoService(
        cache_kernel=CacheKernel(clock, ttl_ms=config.CACHE_TTL_MS, rng=rng),
        index_kernel=IndexKernel.from_seed(config.LOG_CORPUS_SIZE, config.LOG_CORPUS_SEED, clock=clock, rng=rng),
        batch_kernel=BatchKernel(clock, group_size=config.BATCH_GROUP_SIZE, max_items=config.MAX_BATCH_ITEMS, rng=rng),
        delivery_kernel=DeliveryKernel(clock, rng=rng),
    )
    logger.info("Demo service initialized successfully (%d index tokens)", len(demo.index_kernel.index))
    return Services(chat=chat, demo=demo)


def print_title():
    """Print the startup banner to the console."""
    CYAN = "\033[96m"
    MAGENTA = "\033[95m"
    BOLD = "\033[1m"
    RESET = "\033[0m"
    print(f"\n{BOLD}{CYAN}  ==== PORTFOLIO ASSISTANT ===={RESET}\n{MAGENTA}  chat + performance demos{RESET}\n")


def _error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body = ErrorResponse(error=message, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


# =========================================================================
# APP FACTORY
# =========================================================================

def create_app(services: Optional[Services] = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: build services (unless injected) before any request is served.
        Shutdown: nothing to persist; all state is process-lifetime only.
        """
        print_title()
        try:
            if getattr(app.state, "services", None) is None:
                app.state.services = build_services()
        except Exception as e:
            logger.error(f"Fatal error during startup: {e}", exc_info=True)
            raise
        logger.info("=" * 60)
        logger.info("Portfolio assistant is online")
        logger.info("Demo types: %s", ", ".join(app.state.services.demo.demo_types))
        logger.info("=" * 60)
        yield
        logger.info("Shutting down portfolio assistant. Goodbye!")

    app = FastAPI(
        title="Portfolio Assistant API",
        description="Scripted chat assistant and performance optimization demos",
        lifespan=lifespan,
    )
    app.state.services = services

    # Allow any origin so the frontend on another port or domain can call this API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Same 400 shape as InvalidInput raised by the services.
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid value')}"
            for err in exc.errors()
        )
        logger.warning("Rejected request to %s: %s", request.url.path, details)
        return _error_response(400, details or "Invalid request")

    # =========================================================================
    # API ENDPOINTS
    # =========================================================================
    # Plain `def` routes run in FastAPI's threadpool, so simulated delays in one
    # request do not hold up the others.

    @app.get("/")
    def root():
        """Return the API name and a short description of each endpoint (for discovery)."""
        return {
            "message": "Portfolio Assistant API",
            "endpoints": {
                "/chat": "Chat with the portfolio assistant",
                "/demo": "Run a performance demo (caching, search, batch, realtime)",
                "/health": "System health check",
            },
        }

    @app.get("/health")
    def health(request: Request):
        """Return 'healthy' and whether each service is initialized."""
        current = request.app.state.services
        return {
            "status": "healthy",
            "chat_service": current is not None and current.chat is not None,
            "demo_service": current is not None and current.demo is not None,
            "log_entries": len(current.demo.index_kernel.corpus) if current else 0,
            "cached_flights": len(current.demo.cache_kernel) if current else 0,
        }

    @app.post("/chat", response_model=ChatResponse)
    def chat(body: ChatRequest, request: Request):
        """
        Chat endpoint - send a message to the portfolio assistant.

        REQUEST BODY:
        {
            "message": "Tell me about your experience",
            "conversationHistory": [{"role": "user", "content": "Hi"}, ...]
        }

        RESPONSE:
        {
            "success": true,
            "response": "**American Airlines** (2023 - Present) ...",
            "metadata": {"intent": "experience", "context": {...}, "model": "mcp-assistant-v1",
                         "timestamp": "...", "processingTimeMs": 512.4}
        }
        """
        current = request.app.state.services
        if current is None:
            return _error_response(503, "Chat service not initialized")

        try:
            return current.chat.handle(body.message, body.conversation_history)
        except PortfolioError as e:
            if e.status_code >= 500:
                logger.error(f"Error processing chat: {e}", exc_info=True)
                return _error_response(e.status_code, CHAT_FAILURE_MESSAGE)
            logger.warning(f"Invalid chat request: {e}")
            return _error_response(e.status_code, e.message)
        except Exception as e:
            logger.error(f"Error processing chat: {e}", exc_info=True)
            return _error_response(500, CHAT_FAILURE_MESSAGE)

    @app.post("/demo")
    def demo(request: Request, body: Optional[Dict[str, Any]] = Body(default=None)):
        """
        Demo endpoint - run one performance demo.

        REQUEST BODY (one of):
          {"type": "caching", "flightId": "AA101", "useCache": true}
          {"type": "search", "query": "ERROR: Connection timeout", "useIndexed": true}
          {"type": "batch", "count": 12, "useBatch": true}
          {"type": "realtime", "eventId": 3, "useWebSocket": false}
        """
        current = request.app.state.services
        if current is None:
            return _error_response(503, "Demo service not initialized")

        try:
            result = current.demo.dispatch(body)
            return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
        except UnknownDiscriminant as e:
            logger.warning(f"Unknown demo type: {e.received_type!r}")
            return _error_response(e.status_code, e.message, received_type=e.received_type)
        except PortfolioError as e:
            if e.status_code >= 500:
                logger.error(f"Demo API error: {e} ({e.cause!r})", exc_info=True)
                return _error_response(e.status_code, DEMO_FAILURE_MESSAGE, details=e.message)
            logger.warning(f"Invalid demo request: {e}")
            return _error_response(e.status_code, e.message)
        except Exception as e:
            logger.error(f"Demo API error: {e}", exc_info=True)
            return _error_response(500, DEMO_FAILURE_MESSAGE, details="Unexpected error")

    return app


app = create_app()


# -------------------------------------------------------------------------
# STANDALONE RUN (python -m app.main)
# -------------------------------------------------------------------------
def run():
    """Start the uvicorn server (same as run.py); used if someone does python -m app.main"""
    uvicorn.run(
        "app.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    run()
