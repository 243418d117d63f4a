"""Processing pipeline and AI enrichment."""

__all__ = [
    "ai_enricher",
    "ai_service",
    "classification",
    "llm_client",
    "parsing",
    "pipeline",
    "rate_limit",
    "trends",
    "types",
]
