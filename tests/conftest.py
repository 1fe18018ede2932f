# tests/conftest.py
"""Shared fixtures for the portfolio assistant tests.

Every fixture builds fresh state: a ManualClock (no real sleeping, time only
moves when code "sleeps" or a test advances it), a seeded random generator,
and new kernels, so no test can observe another test's cache entries.
"""

from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from app.knowledge_base import load_knowledge_base
from app.main import build_services, create_app
from app.services.batch_kernel import BatchKernel
from app.services.cache_kernel import CacheKernel
from app.services.chat_service import ChatService
from app.services.delivery_kernel import DeliveryKernel
from app.services.demo_service import DemoService
from app.services.index_kernel import IndexKernel
from app.services.intent_classifier import IntentClassifier
from app.services.response_generator import ResponseGenerator
from app.utils.clock import ManualClock


TARGET_LOG = "ERROR: Connection timeout at service.auth.validate()"


# === FIXTURES: Time and randomness ===


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


# === FIXTURES: Chat ===


@pytest.fixture
def knowledge_base():
    return load_knowledge_base()


@pytest.fixture
def generator(knowledge_base) -> ResponseGenerator:
    return ResponseGenerator(knowledge_base)


@pytest.fixture
def chat_service(generator, clock, rng) -> ChatService:
    return ChatService(
        classifier=IntentClassifier(),
        generator=generator,
        clock=clock,
        model_identifier="mcp-assistant-v1",
        history_window=6,
        max_message_length=200,
        simulate_delay=True,
        rng=rng,
    )


# === FIXTURES: Demo kernels ===


@pytest.fixture
def cache_kernel(clock, rng) -> CacheKernel:
    return CacheKernel(clock, ttl_ms=60_000, rng=rng)


@pytest.fixture
def small_corpus() -> list[str]:
    """Hand-written corpus with the target line at position 3."""
    return [
        "[0] INFO: Request processed successfully",
        "[1] DEBUG: Connection established",
        "[2] WARN: High memory usage detected",
        f"[3] {TARGET_LOG}",
        "[4] INFO: Cache hit for user session",
        "[5] ERROR: Database connection failed",
        f"[6] {TARGET_LOG}",
    ]


@pytest.fixture
def small_index_kernel(small_corpus, clock, rng) -> IndexKernel:
    return IndexKernel(small_corpus, clock=clock, rng=rng)


@pytest.fixture(scope="session")
def full_index_kernel() -> IndexKernel:
    """10,000-line seeded corpus, as built at startup. Read-only, so shared across tests."""
    return IndexKernel.from_seed(10_000, 42, clock=ManualClock(), rng=random.Random(0))


@pytest.fixture
def batch_kernel(clock, rng) -> BatchKernel:
    return BatchKernel(clock, group_size=4, max_items=100, rng=rng)


@pytest.fixture
def delivery_kernel(clock, rng) -> DeliveryKernel:
    return DeliveryKernel(clock, rng=rng)


@pytest.fixture
def demo_service(cache_kernel, small_index_kernel, batch_kernel, delivery_kernel) -> DemoService:
    return DemoService(cache_kernel, small_index_kernel, batch_kernel, delivery_kernel)


# === FIXTURES: HTTP ===


@pytest.fixture
def services():
    return build_services(clock=ManualClock(), seed=99)


@pytest.fixture
def client(services) -> TestClient:
    return TestClient(create_app(services=services))
