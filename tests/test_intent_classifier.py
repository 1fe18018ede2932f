# tests/test_intent_classifier.py
"""Unit tests for app/services/intent_classifier.py."""

from __future__ import annotations

import pytest

from app.models import Intent
from app.services.intent_classifier import DEFAULT_RULES, IntentClassifier, IntentRule, classify


class TestClassify:

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("What's your tech stack?", Intent.SKILLS),
            ("Tell me about your experience", Intent.EXPERIENCE),
            ("Show me a project", Intent.PROJECTS),
            ("How can I contact him?", Intent.CONTACT),
            ("Who are you?", Intent.INTRO),
            ("hello", Intent.GREETING),
            ("Any optimization tricks?", Intent.PERFORMANCE),
            ("backend", Intent.BACKEND),
            ("frontend", Intent.FRONTEND),
        ],
    )
    def test_topics(self, message, expected):
        assert classify(message) == expected

    @pytest.mark.parametrize("message", ["", "   ", "\n\t", "🚀🔥", "qwzx plmnb"])
    def test_fallback_is_general(self, message):
        assert classify(message) == Intent.GENERAL

    def test_none_is_general(self):
        assert classify(None) == Intent.GENERAL

    def test_case_insensitive(self):
        assert classify("HELLO") == Intent.GREETING
        assert classify("TECH") == Intent.SKILLS

    def test_deterministic(self):
        message = "Tell me about the backend projects you built"
        results = {classify(message) for _ in range(20)}
        assert len(results) == 1

    def test_always_returns_member_of_intent_set(self):
        for message in ["", "x", "hi there", "???", "a" * 5000, "データベース"]:
            assert classify(message) in set(Intent)


class TestPrecedence:

    def test_skills_before_contact(self):
        assert classify("what's your tech stack, contact info?") == Intent.SKILLS

    def test_skills_before_backend(self):
        assert classify("backend skills") == Intent.SKILLS

    def test_experience_before_projects(self):
        assert classify("which projects at your job?") == Intent.EXPERIENCE

    def test_keywords_match_inside_words(self):
        # "this" contains "hi"
        assert classify("this") == Intent.GREETING

    def test_rule_order(self):
        assert [rule.intent for rule in DEFAULT_RULES] == [
            Intent.SKILLS,
            Intent.EXPERIENCE,
            Intent.PROJECTS,
            Intent.CONTACT,
            Intent.INTRO,
            Intent.GREETING,
            Intent.PERFORMANCE,
            Intent.BACKEND,
            Intent.FRONTEND,
        ]


class TestRules:

    @pytest.mark.parametrize("rule", DEFAULT_RULES, ids=lambda r: r.intent.value)
    def test_each_keyword_matches_its_rule(self, rule):
        for keyword in rule.keywords:
            assert rule.matches(keyword)

    def test_rule_does_not_match_unrelated_text(self):
        rule = IntentRule(Intent.CONTACT, ["email"])
        assert not rule.matches("nothing relevant")

    def test_custom_rule_set(self):
        classifier = IntentClassifier(rules=[IntentRule(Intent.CONTACT, ["ping"])])
        assert classifier.classify("PING me") == Intent.CONTACT
        assert classifier.classify("hello") == Intent.GENERAL
