"""
INTENT CLASSIFIER
=================

Maps a free-text chat message to exactly one Intent using an ordered list of
keyword rules. The first rule with a keyword contained in the lowercased
message wins; if none match, the intent is GENERAL.

Rule order matters because a message can mention several topics
("backend skills" is SKILLS, not BACKEND). Keywords match as plain substrings,
so "hi" also matches "this" and "ui" matches "build"; that is the intended,
deliberately simple behaviour.
"""

from typing import Iterable, Sequence, Tuple

from app.models import Intent


class IntentRule:
    """One (keywords -> intent) rule. matches() is the rule's predicate."""

    def __init__(self, intent: Intent, keywords: Iterable[str]):
        self.intent = intent
        self.keywords: Tuple[str, ...] = tuple(k.lower() for k in keywords)

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)

    def __repr__(self) -> str:
        return f"IntentRule({self.intent.value}, {list(self.keywords)})"


# Evaluated top to bottom; do not reorder without updating the precedence tests.
DEFAULT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(Intent.SKILLS, ("skill", "tech", "stack", "know", "proficient", "expert")),
    IntentRule(Intent.EXPERIENCE, ("experience", "work", "job", "company", "career", "role")),
    IntentRule(Intent.PROJECTS, ("project", "built", "created", "portfolio", "demo")),
    IntentRule(Intent.CONTACT, ("contact", "reach", "email", "linkedin", "github", "hire", "connect")),
    IntentRule(Intent.INTRO, ("who", "about", "yourself", "introduce", "tell me")),
    IntentRule(Intent.GREETING, ("hi", "hello", "hey", "greet")),
    IntentRule(Intent.PERFORMANCE, ("performance", "optimization", "cache", "fast", "speed")),
    IntentRule(Intent.BACKEND, ("backend", "api", "server", "database")),
    IntentRule(Intent.FRONTEND, ("frontend", "react", "ui", "ux")),
)


class IntentClassifier:
    def __init__(self, rules: Sequence[IntentRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def classify(self, text: str) -> Intent:
        """Return the intent of the first matching rule, or GENERAL. Never raises for string input."""
        lowered = (text or "").lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule.intent
        return Intent.GENERAL


def classify(text: str) -> Intent:
    """Classify with the default rule set."""
    return IntentClassifier().classify(text)
