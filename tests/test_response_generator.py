# tests/test_response_generator.py
"""Unit tests for app/services/response_generator.py and app/knowledge_base.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.knowledge_base import load_knowledge_base
from app.models import Intent
from app.services.response_generator import ResponseGenerator


class TestStability:

    @pytest.mark.parametrize("intent", list(Intent), ids=lambda i: i.value)
    def test_same_intent_same_text(self, generator, intent):
        first = generator.generate(intent)
        second = generator.generate(intent)
        assert first.text == second.text
        assert first.context == second.context

    def test_independent_generators_agree(self):
        a = ResponseGenerator(load_knowledge_base()).generate(Intent.PROJECTS)
        b = ResponseGenerator(load_knowledge_base()).generate(Intent.PROJECTS)
        assert a.text == b.text

    @pytest.mark.parametrize("intent", list(Intent), ids=lambda i: i.value)
    def test_context_names_intent(self, generator, intent):
        assert generator.generate(intent).context["intent"] == intent.value


class TestTemplates:

    def test_skills_lists_every_category_and_item(self, generator, knowledge_base):
        result = generator.generate(Intent.SKILLS)
        for _, items in knowledge_base.skills:
            for item in items:
                assert item in result.text
        assert result.context["skills"]["backend"][0] == "Python"
        assert set(result.context["skills"]) == {"backend", "frontend", "devops", "ai"}

    def test_experience_lists_every_record(self, generator, knowledge_base):
        result = generator.generate(Intent.EXPERIENCE)
        for record in knowledge_base.experience:
            assert record.organization in result.text
            assert record.title in result.text
            assert record.period in result.text
            for highlight in record.highlights:
                assert f"• {highlight}" in result.text
        assert result.context["companies"] == ["American Airlines", "MaxLinear Technologies"]

    def test_experience_keeps_record_order(self, generator):
        text = generator.generate(Intent.EXPERIENCE).text
        assert text.index("American Airlines") < text.index("MaxLinear Technologies")

    def test_projects_lists_tech_and_impact(self, generator, knowledge_base):
        result = generator.generate(Intent.PROJECTS)
        for project in knowledge_base.projects:
            assert project.name in result.text
            assert ", ".join(project.tech) in result.text
            assert project.impact in result.text
        assert result.context["projectCount"] == 4

    def test_contact_has_links(self, generator, knowledge_base):
        text = generator.generate(Intent.CONTACT).text
        assert knowledge_base.profile.github_url in text
        assert knowledge_base.profile.linkedin_url in text

    def test_intro_names_owner(self, generator, knowledge_base):
        text = generator.generate(Intent.INTRO).text
        assert knowledge_base.profile.name in text
        assert knowledge_base.profile.title in text

    def test_general_suggests_topics(self, generator):
        result = generator.generate(Intent.GENERAL)
        assert result.context["suggestedTopics"] == ["skills", "experience", "projects"]


class TestFallback:

    @pytest.mark.parametrize("unknown", ["weather", "", None, 42])
    def test_unknown_intent_renders_general(self, generator, unknown):
        result = generator.generate(unknown)
        assert result.text == generator.generate(Intent.GENERAL).text

    def test_string_value_of_known_intent(self, generator):
        assert generator.generate("skills").text == generator.generate(Intent.SKILLS).text


class TestKnowledgeBase:

    def test_is_frozen(self, knowledge_base):
        with pytest.raises(ValidationError):
            knowledge_base.profile.name = "Someone Else"

    def test_collections_are_tuples(self, knowledge_base):
        assert isinstance(knowledge_base.experience, tuple)
        assert isinstance(knowledge_base.experience[0].highlights, tuple)

    def test_skills_copy_does_not_leak(self, knowledge_base):
        copy = knowledge_base.skills_by_category()
        copy["backend"].append("COBOL")
        assert "COBOL" not in knowledge_base.skills_by_category()["backend"]
