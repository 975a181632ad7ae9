"""Templated ad-script concepts seeded by report keywords."""

from __future__ import annotations

from ad_insight.errors import EmptyTopicError
from ad_insight.models import ParsedData, ScriptConcept


def generate_concepts(parsed: ParsedData, topic: str) -> list[ScriptConcept]:
    """Build three short script ideas for a topic.

    Each idea leans on one winning angle (family, science, convenience) and
    pulls in the report's top keywords, falling back to generic wording when
    the report yielded too few.
    """
    topic = topic.strip() if topic else ""
    if not topic:
        raise EmptyTopicError()

    kw = parsed.top_keywords
    first = kw[0] if len(kw) > 0 else "family harmony"
    third = kw[2] if len(kw) > 2 else "healing"

    return [
        ScriptConcept(
            title=f"{topic} for Families",
            format="IG Reel (15s)",
            hook=f'"Why every parent should know about {topic}"',
            script=(
                'Hook: Show a parent looking stressed. Text: "Parenting is hard..." \n\n'
                f"Body: Quick cuts showing {topic} helping the family. Focus on {first}.\n\n"
                'CTA: "Learn how in our workshop →"'
            ),
        ),
        ScriptConcept(
            title=f"Science Behind {topic}",
            format="IG Reel (20s)",
            hook=f'"Is {topic} science or superstition?"',
            script=(
                "Hook: Asking the skeptical question.\n\n"
                f"Body: Show scientific research/studies. Use keywords: {', '.join(kw[:2])}.\n\n"
                'CTA: "See the proof yourself →"'
            ),
        ),
        ScriptConcept(
            title=f"{topic} from Anywhere",
            format="Story/Reel (10s)",
            hook="\"You don't even need to be there...\"",
            script=(
                "Hook: Show someone relaxing at home.\n\n"
                f"Body: Emphasize distance/convenience aspect of {topic}. Use {third} angle.\n\n"
                'CTA: "Try it from home →"'
            ),
        ),
    ]
