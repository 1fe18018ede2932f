"""
DATA MODELS MODULE
==================

This file defines the Pydantic models used for API requests and responses.
FastAPI uses these to validate incoming JSON and to serialize responses; the
services build and return them directly.

JSON uses camelCase (the frontend is JavaScript), Python code uses snake_case:
every model derives from ApiModel, whose alias generator maps one to the other.

MODELS:
  Intent            - Closed set of topics a chat message can be classified into.
  ChatTurn          - One message of the caller-owned conversation (role + content + metadata).
  ChatRequest       - Body of POST /chat (message + conversationHistory).
  ChatResponse      - Body returned by POST /chat (response text + metadata).
  CachingDemoRequest, SearchDemoRequest, BatchDemoRequest, RealtimeDemoRequest
                    - Type-specific fields of POST /demo, parsed after dispatch on `type`.
  CacheResult, SearchResult, BatchResult, DeliveryResult
                    - What each demo kernel returns.
  ErrorResponse     - Body of every 4xx/5xx answer.

Some results also expose the older field names the frontend reads (cached,
responseTime, foundAt, ...) as computed fields.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==============================================================================
# CHAT MODELS
# ==============================================================================

class Intent(str, Enum):
    GREETING = "greeting"
    INTRO = "intro"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    PERFORMANCE = "performance"
    BACKEND = "backend"
    FRONTEND = "frontend"
    CONTACT = "contact"
    GENERAL = "general"


class ChatTurnMetadata(ApiModel):
    """Metadata the frontend keeps on assistant turns. Unknown keys are ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    intent: Optional[str] = None
    model: Optional[str] = None
    processing_time_ms: Optional[float] = None
    timestamp: Optional[str] = None


class ChatTurn(ApiModel):
    """
    A single message in a conversation (user or assistant).
    The caller stores the conversation; order defines chronology.
    """
    role: Literal["user", "assistant"]
    # The frontend sends "content"; "text" is accepted as well.
    content: str = Field(validation_alias=AliasChoices("content", "text"))
    metadata: Optional[ChatTurnMetadata] = None


class ChatRequest(ApiModel):
    """
    Request body for POST /chat.

    - message: Required. Emptiness and length are checked by the chat service so
      the error comes back in the same shape as every other invalid input.
    - conversationHistory: Optional. The caller's conversation so far; only the
      last few turns are read. null is treated as an empty history.
    """
    message: str
    conversation_history: Optional[List[ChatTurn]] = None


class ChatMetadata(ApiModel):
    intent: Intent
    context: Dict[str, Any]
    model: str
    timestamp: str
    processing_time_ms: float

    @computed_field(alias="processingTime")
    @property
    def processing_time(self) -> int:
        return round(self.processing_time_ms)


class ChatResponse(ApiModel):
    success: bool = True
    response: str
    metadata: ChatMetadata


class ErrorResponse(ApiModel):
    success: bool = False
    error: str
    received_type: Optional[Any] = None
    details: Optional[str] = None


# ==============================================================================
# DEMO REQUEST MODELS
# ==============================================================================

class CachingDemoRequest(ApiModel):
    flight_id: str
    use_cache: bool = False


class SearchDemoRequest(ApiModel):
    query: str
    use_indexed: bool = False


class BatchDemoRequest(ApiModel):
    count: int = 12
    use_batch: bool = False


class RealtimeDemoRequest(ApiModel):
    event_id: int = Field(default=0, ge=0)
    use_web_socket: bool = False


# ==============================================================================
# DEMO RESULT MODELS
# ==============================================================================

class FlightRecord(ApiModel):
    flight_id: str
    departure: str
    arrival: str
    status: str
    gate: str


class CacheResult(ApiModel):
    success: bool = True
    data: FlightRecord
    cache_hit: bool
    elapsed_ms: float
    source: str

    @computed_field(alias="cached")
    @property
    def cached(self) -> bool:
        return self.cache_hit

    @computed_field(alias="responseTime")
    @property
    def response_time(self) -> float:
        return self.elapsed_ms


class SearchResult(ApiModel):
    success: bool = True
    found: bool
    position: int
    comparisons: int
    total_entries: int
    elapsed_ms: float
    algorithm: str
    complexity: str

    @computed_field(alias="foundAt")
    @property
    def found_at(self) -> int:
        return self.position

    @computed_field(alias="totalLogs")
    @property
    def total_logs(self) -> int:
        return self.total_entries

    @computed_field(alias="responseTime")
    @property
    def response_time(self) -> float:
        return self.elapsed_ms


class BatchItem(ApiModel):
    id: int
    elapsed_ms: float


class BatchResult(ApiModel):
    success: bool = True
    results: List[BatchItem]
    total_elapsed_ms: float
    connections_used: int
    item_count: int
    method: str
    efficiency: str

    @computed_field(alias="totalTime")
    @property
    def total_time(self) -> float:
        return self.total_elapsed_ms

    @computed_field(alias="connections")
    @property
    def connections(self) -> int:
        return self.connections_used


class DeliveryResult(ApiModel):
    success: bool = True
    event_id: int
    value: int
    latency_ms: float
    server_load_percent: int
    method: str
    protocol: str

    @computed_field(alias="latency")
    @property
    def latency(self) -> float:
        return self.latency_ms

    @computed_field(alias="serverLoad")
    @property
    def server_load(self) -> int:
        return self.server_load_percent
