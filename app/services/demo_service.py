"""
DEMO SERVICE MODULE
===================

Entry point for POST /demo. Reads the `type` field of the request body,
validates the rest of the body against that demo's request model, and calls
the matching kernel:

  caching  -> CacheKernel.fetch(flightId, useCache)
  search   -> IndexKernel.search(query, useIndexed)
  batch    -> BatchKernel.run(count, useBatch)
  realtime -> DeliveryKernel.next_event(eventId, useWebSocket)

Missing or malformed fields raise InvalidInput, an unrecognized `type` raises
UnknownDiscriminant, and anything else that goes wrong inside a kernel is
wrapped in InternalFailure so the API layer can answer 500 without leaking
details.
"""

import logging
from typing import Any, Callable, Dict

from pydantic import BaseModel, ValidationError

from app.errors import InternalFailure, InvalidInput, PortfolioError, UnknownDiscriminant
from app.models import BatchDemoRequest, CachingDemoRequest, RealtimeDemoRequest, SearchDemoRequest
from app.services.batch_kernel import BatchKernel
from app.services.cache_kernel import CacheKernel
from app.services.delivery_kernel import DeliveryKernel
from app.services.index_kernel import IndexKernel

logger = logging.getLogger("portfolio")


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


class DemoService:
    """Holds the four kernels (and through them the shared cache store and log index)."""

    def __init__(
        self,
        cache_kernel: CacheKernel,
        index_kernel: IndexKernel,
        batch_kernel: BatchKernel,
        delivery_kernel: DeliveryKernel,
    ):
        self.cache_kernel = cache_kernel
        self.index_kernel = index_kernel
        self.batch_kernel = batch_kernel
        self.delivery_kernel = delivery_kernel
        self._handlers: Dict[str, Callable[[Dict[str, Any]], BaseModel]] = {
            "caching": self._caching,
            "search": self._search,
            "batch": self._batch,
            "realtime": self._realtime,
        }

    @property
    def demo_types(self):
        return list(self._handlers)

    # ------------------------------------------------------------------------------
    # HANDLERS
    # ------------------------------------------------------------------------------

    def _caching(self, body: Dict[str, Any]) -> BaseModel:
        request = CachingDemoRequest.model_validate(body)
        return self.cache_kernel.fetch(request.flight_id, request.use_cache)

    def _search(self, body: Dict[str, Any]) -> BaseModel:
        request = SearchDemoRequest.model_validate(body)
        return self.index_kernel.search(request.query, request.use_indexed)

    def _batch(self, body: Dict[str, Any]) -> BaseModel:
        request = BatchDemoRequest.model_validate(body)
        return self.batch_kernel.run(request.count, request.use_batch)

    def _realtime(self, body: Dict[str, Any]) -> BaseModel:
        request = RealtimeDemoRequest.model_validate(body)
        return self.delivery_kernel.next_event(request.event_id, request.use_web_socket)

    # ------------------------------------------------------------------------------
    # DISPATCH
    # ------------------------------------------------------------------------------

    def dispatch(self, body: Any) -> BaseModel:
        if not isinstance(body, dict):
            raise InvalidInput("Request body must be a JSON object")
        if "type" not in body or body["type"] in (None, ""):
            raise InvalidInput("Missing demo type")

        demo_type = body["type"]
        handler = self._handlers.get(demo_type) if isinstance(demo_type, str) else None
        if handler is None:
            raise UnknownDiscriminant(demo_type)

        logger.info("Running %s demo", demo_type)
        try:
            return handler(body)
        except ValidationError as e:
            raise InvalidInput(_describe_validation_error(e), cause=e)
        except PortfolioError:
            raise
        except Exception as e:
            raise InternalFailure(f"{demo_type} demo failed", cause=e)
