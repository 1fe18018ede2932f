"""
CONFIGURATION MODULE
====================

PURPOSE:
  Central place for all portfolio assistant settings: the model identifier
  reported in chat metadata, chat limits, and the knobs of the four demo
  kernels (cache TTL, log corpus size and seed, batch group size).

WHAT THIS FILE DOES:
  - Loads environment variables from .env (so deployments can tune values without code edits).
  - Exposes chat settings: MODEL_IDENTIFIER, CHAT_HISTORY_WINDOW, MAX_MESSAGE_LENGTH.
  - Exposes latency simulation switches: SIMULATE_LATENCY and LATENCY_SCALE.
  - Exposes demo kernel settings: CACHE_TTL_MS, LOG_CORPUS_SIZE, LOG_CORPUS_SEED,
    BATCH_GROUP_SIZE, MAX_BATCH_ITEMS.
  - Exposes HOST and PORT for run.py.

USAGE:
  Import what you need: `from config import CACHE_TTL_MS, MODEL_IDENTIFIER`
  All services receive these values from app.main so behaviour is consistent.
"""

import os
import logging
from dotenv import load_dotenv


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
# Used when an environment value cannot be parsed and we fall back to the default.
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
# Load environment variables from .env file (if it exists).
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment; log and use the default if it is not a number."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid number for %s=%r, using default %s", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# ============================================================================
# CHAT CONFIGURATION
# ============================================================================
# The assistant does not call a real LLM. MODEL_IDENTIFIER is only reported in
# the response metadata so the frontend can show which engine answered.
# CHAT_HISTORY_WINDOW: how many of the most recent turns the chat service reads.
# MAX_MESSAGE_LENGTH: longer messages are rejected as invalid input.

MODEL_IDENTIFIER = os.getenv("MODEL_IDENTIFIER", "mcp-assistant-v1")
CHAT_HISTORY_WINDOW = _env_int("CHAT_HISTORY_WINDOW", 6)
MAX_MESSAGE_LENGTH = _env_int("MAX_MESSAGE_LENGTH", 4_000)

# ============================================================================
# LATENCY SIMULATION
# ============================================================================
# Every timing the demos report is a simulated sample, never a measurement of
# real I/O. When SIMULATE_LATENCY is on, the server also sleeps for that long
# so the frontend animations feel realistic. LATENCY_SCALE multiplies the
# sleeps (0.5 = twice as fast); it never changes the reported numbers.

SIMULATE_LATENCY = _env_bool("SIMULATE_LATENCY", True)
LATENCY_SCALE = _env_float("LATENCY_SCALE", 1.0)

# ============================================================================
# DEMO KERNEL CONFIGURATION
# ============================================================================
# CACHE_TTL_MS: how long a cached flight stays fresh (1 minute).
# LOG_CORPUS_SIZE / LOG_CORPUS_SEED: the synthetic log corpus is sampled once at
#   startup from a seeded generator, so the same seed gives the same corpus and index.
# BATCH_GROUP_SIZE: items covered by one round trip in batched mode.
# MAX_BATCH_ITEMS: upper bound on the batch demo size so delays stay bounded.

CACHE_TTL_MS = _env_int("CACHE_TTL_MS", 60_000)
LOG_CORPUS_SIZE = _env_int("LOG_CORPUS_SIZE", 10_000)
LOG_CORPUS_SEED = _env_int("LOG_CORPUS_SEED", 42)
BATCH_GROUP_SIZE = _env_int("BATCH_GROUP_SIZE", 4)
MAX_BATCH_ITEMS = _env_int("MAX_BATCH_ITEMS", 100)

# ============================================================================
# SERVER
# ============================================================================
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 8000)
