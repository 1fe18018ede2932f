"""
INDEX KERNEL
============

Log-search demo comparing a sequential scan with an inverted index.

CORPUS:
  generate_corpus() samples N lines of the form "[i] <template>" from a fixed
  set of log templates. The generator is seeded, so a given seed always yields
  the same corpus.

INDEX:
  build_index() maps every lowercase alphanumeric token of every line to the
  ascending list of line positions containing it (its posting list). It is a
  pure function of the corpus; it is built once at startup and never changed.

SEARCH:
  linear  - scan from line 0, case-insensitive substring match of the whole
            query, one comparison per line examined, stop at the first match.
  indexed - gather candidate lines from the index, pay ceil(log2(N))
            comparisons for the index descent, then count one comparison per
            candidate line until one actually contains the whole query. At most
            MAX_CANDIDATE_CHECKS candidates are examined; past that the query is
            reported as not found.

  Candidates come from one key token chosen by a fixed demonstration policy:
  the first query token from PRIORITY_TOKENS that exists in the index,
  otherwise the first query token that exists in the index. This is a
  simplification for the demo, not a query planner; multi-token queries are
  not intersected.

  When no query token is a whole index key ("onnect", "err"), the vocabulary is
  scanned for keys containing a query token and their posting lists are merged
  in ascending order. A query with no alphanumeric token at all ("()") cannot
  use the index, so it falls back to the sequential scan and says so in its
  algorithm label.
"""

import heapq
import logging
import math
import random
import re
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from app.errors import InvalidInput
from app.models import SearchResult

logger = logging.getLogger("portfolio")

LOG_TEMPLATES = (
    "INFO: Request processed successfully",
    "DEBUG: Connection established",
    "WARN: High memory usage detected",
    "ERROR: Connection timeout at service.auth.validate()",
    "INFO: Cache hit for user session",
    "DEBUG: Query executed in 45ms",
    "ERROR: Database connection failed",
    "INFO: Scheduled job completed",
)

PRIORITY_TOKENS = ("error", "connection", "timeout")

MAX_CANDIDATE_CHECKS = 20

_TOKEN_RE = re.compile(r"[a-z0-9_]+")

# Simulated wall time per unit of work, used only for the reported elapsed_ms.
INDEXED_BASE_MIN_MS = 10
INDEXED_BASE_MAX_MS = 30
LINEAR_MS_PER_THOUSAND_LINES = 30


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


def generate_corpus(size: int, rng: random.Random, templates: Sequence[str] = LOG_TEMPLATES) -> List[str]:
    return [f"[{i}] {rng.choice(templates)}" for i in range(size)]


def build_index(corpus: Sequence[str]) -> Dict[str, List[int]]:
    index: Dict[str, List[int]] = {}
    for position, line in enumerate(corpus):
        # A token repeated in one line is recorded once.
        for token in dict.fromkeys(tokenize(line)):
            index.setdefault(token, []).append(position)
    return index


def _dedupe_sorted(positions: Iterable[int]) -> Iterator[int]:
    last = None
    for position in positions:
        if position != last:
            yield position
            last = position


class IndexKernel:
    def __init__(
        self,
        corpus: Sequence[str],
        index: Optional[Dict[str, List[int]]] = None,
        clock=None,
        rng: Optional[random.Random] = None,
    ):
        self.corpus = tuple(corpus)
        self.index = index if index is not None else build_index(self.corpus)
        self.clock = clock
        self.rng = rng or random.Random()
        self._lowered = tuple(line.lower() for line in self.corpus)

    @classmethod
    def from_seed(cls, size: int, seed: int, clock=None, rng: Optional[random.Random] = None) -> "IndexKernel":
        corpus = generate_corpus(size, random.Random(seed))
        logger.info("Generated log corpus of %d lines (seed=%d)", size, seed)
        return cls(corpus, clock=clock, rng=rng)

    @property
    def descent_cost(self) -> int:
        n = len(self.corpus)
        return math.ceil(math.log2(n)) if n > 0 else 0

    def choose_key_token(self, query: str) -> Optional[str]:
        tokens = tokenize(query)
        for token in tokens:
            if token in PRIORITY_TOKENS and token in self.index:
                return token
        for token in tokens:
            if token in self.index:
                return token
        return None

    def keys_containing(self, fragment: str) -> List[str]:
        """Index keys that contain `fragment` anywhere inside them."""
        return [key for key in self.index if fragment in key]

    def candidate_positions(self, query: str) -> Iterator[int]:
        """Ascending, de-duplicated line positions worth checking for `query`."""
        token = self.choose_key_token(query)
        if token is not None:
            return iter(self.index[token])

        for fragment in tokenize(query):
            keys = self.keys_containing(fragment)
            if keys:
                return _dedupe_sorted(heapq.merge(*(self.index[key] for key in keys)))
        return iter(())

    def _sleep(self, ms: float) -> None:
        if self.clock is not None:
            self.clock.sleep(ms)

    def search_indexed(self, query: str) -> SearchResult:
        if not tokenize(query):
            logger.info("Query %r has no indexable token, scanning sequentially", query)
            return self.search_linear(query)

        needle = query.lower()
        comparisons = self.descent_cost
        position = -1

        for candidate in islice(self.candidate_positions(query), MAX_CANDIDATE_CHECKS):
            comparisons += 1
            if needle in self._lowered[candidate]:
                position = candidate
                break

        elapsed = round(self.rng.uniform(INDEXED_BASE_MIN_MS, INDEXED_BASE_MAX_MS), 2)
        self._sleep(elapsed)
        logger.info("Indexed search %r: %d comparisons", query, comparisons)
        return SearchResult(
            found=position != -1,
            position=position,
            comparisons=comparisons,
            total_entries=len(self.corpus),
            elapsed_ms=elapsed,
            algorithm="btree_index",
            complexity="O(log n)",
        )

    def search_linear(self, query: str) -> SearchResult:
        needle = query.lower()
        comparisons = 0
        position = -1
        for i, line in enumerate(self._lowered):
            comparisons += 1
            if needle in line:
                position = i
                break

        elapsed = round(LINEAR_MS_PER_THOUSAND_LINES * math.ceil(comparisons / 1000), 2)
        self._sleep(elapsed)
        logger.info("Linear search %r: %d comparisons", query, comparisons)
        return SearchResult(
            found=position != -1,
            position=position,
            comparisons=comparisons,
            total_entries=len(self.corpus),
            elapsed_ms=elapsed,
            algorithm="sequential_scan",
            complexity="O(n)",
        )

    def search(self, query: str, use_index: bool) -> SearchResult:
        if not isinstance(query, str) or not query.strip():
            raise InvalidInput("query must be a non-empty string")
        if use_index:
            return self.search_indexed(query)
        return self.search_linear(query)
