"""Heuristic analysis of pasted ad-performance report text.

Turns free-form report text (section headers like "Winning Ads:" followed by
ad lines such as "VS 20" or "IG Reel - Can Reiki Cure Illness?") into a
ParsedData record:
- Winning / losing ad lines by section
- Keyword frequencies from winning ads, rescaled for display
- Theme affinity scores from regex signals
- Creative format counts
- Summary stats and reporting window
"""

from __future__ import annotations

import math
import re
from typing import Callable, Optional

from ad_insight.errors import EmptyReportError
from ad_insight.models import (
    AudienceSlice,
    FormatCount,
    KeywordStat,
    ParsedData,
    ReportStats,
    ThemeScore,
)
from ad_insight.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DATE_RANGE = "Not specified"
MAX_KEYWORDS = 8
LOSING_THEME_PENALTY = 0.5

_DURATION_RE = re.compile(r"Duration:\s*([^\n]+)", re.IGNORECASE)
_AD_LINE_RE = re.compile(r"^(VS|IG|PC|Reel)", re.IGNORECASE)
_TOKEN_SPLIT_RE = re.compile(r"\W+", re.ASCII)

STOPWORDS = frozenset({
    "the", "a", "an", "in", "on", "at", "to", "for", "of", "and", "is",
    "vs", "ig", "reel", "nov", "oct", "sep", "hf", "really", "should",
    "through", "with", "from", "what", "can", "like", "one", "how",
})

# Order matters: results keep this order when scores tie.
THEME_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Family/Parenting", re.compile(r"family|parent|mother|father|child|home", re.I)),
    (
        "Science/Logic",
        re.compile(r"science|research|study|proof|evidence|fact|skeptic|superstition", re.I),
    ),
    ("Health/Healing", re.compile(r"heal|cure|health|wellness|medicine|illness|pain|disease", re.I)),
    ("Money/Wealth", re.compile(r"money|wealth|lottery|rich|attract|abundance|financial", re.I)),
    ("Distance/Convenience", re.compile(r"distance|online|home|anywhere|convenient|remote", re.I)),
    ("Emotional", re.compile(r"feel|emotion|stress|anxiety|peace|calm|transform|energy", re.I)),
)

# Evaluated top to bottom against the lower-cased line; first match wins.
FORMAT_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (lambda s: "ig" in s and "reel" in s, "IG Reels"),
    (lambda s: "vs" in s, "Video Sales (VS)"),
    (lambda s: "pc" in s or "static" in s, "Static/PC"),
    (lambda s: "carousel" in s, "Carousel"),
)

# Not derived from the report text. Reports carry no audience breakdown yet.
PLACEHOLDER_AUDIENCES: tuple[AudienceSlice, ...] = (
    AudienceSlice(name="Parents", count=35),
    AudienceSlice(name="Homemakers", count=25),
    AudienceSlice(name="Coaching Interests", count=20),
    AudienceSlice(name="Cold Audience", count=20),
)


def analyze_report(text: str) -> ParsedData:
    """Parse raw report text into ParsedData.

    Pure and total: any string (including an empty one) yields a valid
    record. Callers should reject blank input before calling.
    """
    lines = _segment_lines(text)
    date_range = extract_date_range(text)
    winning_ads, losing_ads = classify_ad_lines(lines)

    keywords = normalize_keywords(count_keywords(winning_ads))
    themes = score_themes(winning_ads, losing_ads)
    formats = count_formats(winning_ads)

    stats = ReportStats(
        total_winning=len(winning_ads),
        total_losing=len(losing_ads),
        win_rate=win_rate(len(winning_ads), len(losing_ads)),
        date_range=date_range,
    )

    logger.debug(
        f"Analyzed report: {len(lines)} lines, {stats.total_winning} winning, "
        f"{stats.total_losing} losing, {len(keywords)} keywords"
    )

    return ParsedData(
        winning_ads=tuple(winning_ads),
        losing_ads=tuple(losing_ads),
        audiences=PLACEHOLDER_AUDIENCES,
        keywords=tuple(keywords),
        formats=tuple(formats),
        themes=tuple(themes),
        stats=stats,
    )


def _segment_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def extract_date_range(text: str) -> str:
    match = _DURATION_RE.search(text)
    if match:
        return match.group(1).strip()
    return DEFAULT_DATE_RANGE


def classify_ad_lines(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split ad lines into winning and losing by the section they appear in.

    Header lines switch the active section and are not recorded. A line that
    looks like both a header and an ad line is treated as a header.
    """
    winning: list[str] = []
    losing: list[str] = []
    is_winning = False
    is_losing = False

    for line in lines:
        lowered = line.lower()
        if "winning ads" in lowered or "potential winning" in lowered:
            is_winning, is_losing = True, False
        elif "underperforming" in lowered or "losing" in lowered:
            is_winning, is_losing = False, True
        elif _AD_LINE_RE.match(line):
            if is_winning:
                winning.append(line)
            elif is_losing:
                losing.append(line)

    return winning, losing


def count_keywords(ads: list[str]) -> dict[str, int]:
    """Token frequencies across ad lines, in first-seen order."""
    counts: dict[str, int] = {}
    for ad in ads:
        for word in _TOKEN_SPLIT_RE.split(ad.lower()):
            if len(word) > 3 and word not in STOPWORDS:
                counts[word] = counts.get(word, 0) + 1
    return counts


def normalize_keywords(
    counts: dict[str, int], limit: int = MAX_KEYWORDS
) -> list[KeywordStat]:
    """Keep the top keywords and rescale their counts into [1, 3].

    Min and max come from the selected keywords only. Ties keep first-seen
    order since the sort is stable.
    """
    top = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    if not top:
        return []

    max_count = top[0][1]
    min_count = min(count for _, count in top)
    spread = (max_count - min_count) or 1

    return [
        KeywordStat(
            word=word,
            count=count,
            normalized_count=1 + (count - min_count) / spread * 2,
        )
        for word, count in top
    ]


def score_themes(winning: list[str], losing: list[str]) -> list[ThemeScore]:
    """+1 per matching winning line, -0.5 per matching losing line.

    Zero-score themes are dropped; the rest sort by score, highest first.
    """
    scores = {name: 0.0 for name, _ in THEME_PATTERNS}
    for name, pattern in THEME_PATTERNS:
        for ad in winning:
            if pattern.search(ad):
                scores[name] += 1
        for ad in losing:
            if pattern.search(ad):
                scores[name] -= LOSING_THEME_PENALTY

    themes = [ThemeScore(name=name, count=score) for name, score in scores.items() if score != 0]
    themes.sort(key=lambda t: t.count, reverse=True)
    return themes


def classify_format(ad: str) -> Optional[str]:
    lowered = ad.lower()
    for predicate, label in FORMAT_RULES:
        if predicate(lowered):
            return label
    return None


def count_formats(ads: list[str]) -> list[FormatCount]:
    counts = {label: 0 for _, label in FORMAT_RULES}
    for ad in ads:
        label = classify_format(ad)
        if label:
            counts[label] += 1

    formats = [FormatCount(name=name, count=count) for name, count in counts.items() if count > 0]
    formats.sort(key=lambda f: f.count, reverse=True)
    return formats


def win_rate(winning: int, losing: int) -> int:
    """Winning share as a whole percentage, rounding halves up."""
    total = winning + losing
    if total == 0:
        return 0
    return int(math.floor(winning / total * 100 + 0.5))


class ReportAnalyzer:
    """Analyze pasted report text, rejecting blank input up front."""

    def analyze(self, text: str) -> ParsedData:
        if not text or not text.strip():
            raise EmptyReportError()

        parsed = analyze_report(text)
        logger.info(
            f"Report analyzed: {parsed.stats.total_winning} winning, "
            f"{parsed.stats.total_losing} losing, win rate {parsed.stats.win_rate}% "
            f"({parsed.stats.date_range})"
        )
        return parsed
