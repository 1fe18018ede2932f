"""
KNOWLEDGE BASE
==============

Static profile data the chat assistant answers from: who the owner is, their
skills by category, work experience and notable projects.

Everything here is a frozen Pydantic model holding tuples, so request handling
cannot mutate it. load_knowledge_base() is called once at startup; tests may
build their own KnowledgeBase with different data.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Profile(FrozenModel):
    name: str
    first_name: str
    title: str
    employer: str
    specialization: str
    focus: str
    github_url: str
    linkedin_url: str


class ExperienceRecord(FrozenModel):
    organization: str
    title: str
    period: str
    highlights: Tuple[str, ...]


class ProjectRecord(FrozenModel):
    name: str
    tech: Tuple[str, ...]
    impact: str


class KnowledgeBase(FrozenModel):
    profile: Profile
    # Category order is the order the skills response renders them in.
    skills: Tuple[Tuple[str, Tuple[str, ...]], ...]
    experience: Tuple[ExperienceRecord, ...]
    projects: Tuple[ProjectRecord, ...]

    def skills_by_category(self) -> Dict[str, list]:
        """Plain dict copy of the skills, safe to hand out in response context."""
        return {category: list(items) for category, items in self.skills}


def load_knowledge_base() -> KnowledgeBase:
    """Return the portfolio owner's profile."""
    return KnowledgeBase(
        profile=Profile(
            name="Vamsi Krishna Vissapragada",
            first_name="Vamsi",
            title="Senior Software Engineer (SDE-3)",
            employer="American Airlines",
            specialization="Building scalable backend systems, full-stack platforms, and AI-assisted tools",
            focus="Microservices architecture, performance optimization, and production-grade systems",
            github_url="https://github.com/vamsi-1234",
            linkedin_url="https://linkedin.com/in/vamsi-krishna-vissapragada-801602171",
        ),
        skills=(
            ("backend", ("Python", "FastAPI", "Django", "REST APIs", "GraphQL", "PostgreSQL", "Redis")),
            ("frontend", ("React", "Next.js", "TypeScript", "Tailwind CSS", "Framer Motion")),
            ("devops", ("Docker", "Kubernetes", "CI/CD", "AWS", "Azure", "GitHub Actions")),
            ("ai", ("Applied ML", "LLMs", "RAG Systems", "Intelligent Automation", "Log Analysis")),
        ),
        experience=(
            ExperienceRecord(
                organization="American Airlines",
                title="Senior Software Engineer (SDE-3)",
                period="2023 - Present",
                highlights=(
                    "Architected flight data caching system reducing API latency by 70%",
                    "Built microservices handling 10K+ requests/second",
                    "Implemented batch processing pipelines for data synchronization",
                    "Led team of 4 engineers on critical production systems",
                ),
            ),
            ExperienceRecord(
                organization="MaxLinear Technologies",
                title="Software Development Engineer",
                period="2021 - 2023",
                highlights=(
                    "Improved UI engagement by 30% using React + TypeScript",
                    "Built AI-assisted log analysis tool reducing debugging time by 25%",
                    "Reduced deployment time by 35% with Docker CI/CD pipelines",
                    "Implemented WebSocket-based real-time dashboard updates",
                ),
            ),
        ),
        projects=(
            ProjectRecord(
                name="Flight Data Caching System",
                tech=("Redis", "FastAPI", "Python"),
                impact="70% faster API responses, 50% reduction in database load",
            ),
            ProjectRecord(
                name="AI Log Analyzer",
                tech=("Python", "ML", "ElasticSearch"),
                impact="25% faster debugging, automated error pattern detection",
            ),
            ProjectRecord(
                name="Real-time Dashboard",
                tech=("React", "WebSocket", "Node.js"),
                impact="90% reduction in server load vs polling",
            ),
            ProjectRecord(
                name="Batch Processing Pipeline",
                tech=("Python", "Celery", "PostgreSQL"),
                impact="60% reduction in data sync latency",
            ),
        ),
    )
