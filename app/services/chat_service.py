"""
CHAT SERVICE MODULE
===================

Handles one chat message end to end for POST /chat:

  1. Validate the message (non-empty, not too long).
  2. Keep only the most recent turns of the caller's history (the caller owns storage).
  3. Classify the message into an Intent.
  4. Render the reply for that intent from the Knowledge Base.
  5. Attach metadata: intent, context, model identifier, timestamp, processing time.

There is no LLM behind this: the "processing time" is an optional presentational
delay (300-800 ms) taken through the injected clock, so tests can run it
instantly and still see a realistic number.
"""

import logging
import random
from typing import List, Optional, Sequence

from app.errors import InvalidInput
from app.models import ChatMetadata, ChatResponse, ChatTurn
from app.services.intent_classifier import IntentClassifier
from app.services.response_generator import ResponseGenerator

logger = logging.getLogger("portfolio")

PROCESSING_DELAY_MIN_MS = 300
PROCESSING_DELAY_MAX_MS = 800


class ChatService:
    """
    Classifier + generator behind one call. Holds no conversation state of its
    own; every call is independent.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        generator: ResponseGenerator,
        clock,
        model_identifier: str,
        history_window: int = 6,
        max_message_length: int = 4_000,
        simulate_delay: bool = True,
        rng: Optional[random.Random] = None,
    ):
        self.classifier = classifier
        self.generator = generator
        self.clock = clock
        self.model_identifier = model_identifier
        self.history_window = history_window
        self.max_message_length = max_message_length
        self.simulate_delay = simulate_delay
        self.rng = rng or random.Random()

    def recent_history(self, history: Optional[Sequence[ChatTurn]]) -> List[ChatTurn]:
        """Return the last `history_window` turns (all of them if there are fewer)."""
        if not history or self.history_window <= 0:
            return []
        return list(history)[-self.history_window:]

    def handle(self, message: str, history: Optional[Sequence[ChatTurn]] = None) -> ChatResponse:
        if not isinstance(message, str) or not message.strip():
            raise InvalidInput("Message must be a non-empty string")
        if len(message) > self.max_message_length:
            raise InvalidInput(f"Message exceeds {self.max_message_length} characters")

        started = self.clock.now_ms()
        window = self.recent_history(history)

        intent = self.classifier.classify(message)
        generated = self.generator.generate(intent)

        if self.simulate_delay:
            self.clock.sleep(self.rng.uniform(PROCESSING_DELAY_MIN_MS, PROCESSING_DELAY_MAX_MS))

        context = dict(generated.context)
        context["historyTurns"] = len(window)

        logger.info("Chat message classified as %s (%d history turns)", intent.value, len(window))
        return ChatResponse(
            response=generated.text,
            metadata=ChatMetadata(
                intent=intent,
                context=context,
                model=self.model_identifier,
                timestamp=self.clock.timestamp(),
                processing_time_ms=round(self.clock.now_ms() - started, 2),
            ),
        )
