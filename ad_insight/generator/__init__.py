"""Ad script concepts and full-script expansion."""

from ad_insight.generator.concepts import generate_concepts

__all__ = ["generate_concepts"]
