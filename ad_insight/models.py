"""Core data models for the ad insight analyzer and script generator."""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScriptLanguage(str, enum.Enum):
    ENGLISH = "English"
    HINDI = "Hindi"


class _Record(BaseModel):
    """Immutable record; JSON output uses camelCase names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class AudienceSlice(_Record):
    name: str
    count: int


class KeywordStat(_Record):
    word: str
    count: int
    normalized_count: float = Field(alias="normalizedCount")


class FormatCount(_Record):
    name: str
    count: int


class ThemeScore(_Record):
    """Theme affinity score. Losing-ad matches subtract, so it can go negative."""

    name: str
    count: float


class ReportStats(_Record):
    total_winning: int = Field(0, alias="totalWinning")
    total_losing: int = Field(0, alias="totalLosing")
    win_rate: int = Field(0, alias="winRate")  # 0-100
    date_range: str = Field("Not specified", alias="dateRange")


class ParsedData(_Record):
    """Structured view of a pasted ad-performance report."""

    winning_ads: tuple[str, ...] = Field(default=(), alias="winningAds")
    losing_ads: tuple[str, ...] = Field(default=(), alias="losingAds")
    audiences: tuple[AudienceSlice, ...] = ()
    keywords: tuple[KeywordStat, ...] = ()
    formats: tuple[FormatCount, ...] = ()
    themes: tuple[ThemeScore, ...] = ()
    stats: ReportStats = Field(default_factory=ReportStats)

    @property
    def top_keywords(self) -> list[str]:
        return [k.word for k in self.keywords]

    @property
    def top_themes(self) -> list[str]:
        return [t.name for t in self.themes]

    def to_json_dict(self) -> dict:
        """Dump with the camelCase field names used by dashboard consumers."""
        return self.model_dump(mode="json", by_alias=True)


class ScriptConcept(BaseModel):
    """A short templated ad idea, before LLM expansion."""

    title: str
    format: str
    hook: str
    script: str


class FullScript(BaseModel):
    """Result of expanding a ScriptConcept into a production script."""

    concept: ScriptConcept
    language: ScriptLanguage = ScriptLanguage.ENGLISH
    text: str = ""
    ok: bool = True
    error: Optional[str] = None
