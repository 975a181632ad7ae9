"""Tests for the report text analyzer."""

import pytest
from pydantic import ValidationError

from ad_insight.analyzer.report_analyzer import (
    PLACEHOLDER_AUDIENCES,
    THEME_PATTERNS,
    FORMAT_RULES,
    ReportAnalyzer,
    analyze_report,
    classify_format,
    win_rate,
)
from ad_insight.errors import EmptyReportError

SAMPLE_REPORT = """Duration: Sept 15 to Nov 26
Winning Ads:
VS 20
IG Reel - Can Reiki Really Cure Illness?
Underperforming Ads:
VS 44 - Money Attraction
"""

THEME_NAMES = {name for name, _ in THEME_PATTERNS}
FORMAT_NAMES = {label for _, label in FORMAT_RULES}


@pytest.fixture
def sample():
    return analyze_report(SAMPLE_REPORT)


# ── Sections and stats ──


def test_sample_report_sections(sample):
    assert sample.stats.date_range == "Sept 15 to Nov 26"
    assert sample.winning_ads == ("VS 20", "IG Reel - Can Reiki Really Cure Illness?")
    assert sample.losing_ads == ("VS 44 - Money Attraction",)


def test_sample_report_stats(sample):
    assert sample.stats.total_winning == 2
    assert sample.stats.total_losing == 1
    assert sample.stats.win_rate == 67


def test_missing_duration_defaults():
    parsed = analyze_report("Winning Ads:\nVS 20\n")
    assert parsed.stats.date_range == "Not specified"


def test_duration_is_case_insensitive_and_trimmed():
    parsed = analyze_report("some intro\nduration:    Q4 2024   \nWinning Ads:\nVS 1")
    assert parsed.stats.date_range == "Q4 2024"


def test_header_only_report():
    parsed = analyze_report("Winning Ads:\n")
    assert parsed.winning_ads == ()
    assert parsed.stats.win_rate == 0
    assert parsed.keywords == ()
    assert parsed.themes == ()
    assert parsed.formats == ()


def test_empty_text_is_total():
    parsed = analyze_report("")
    assert parsed.winning_ads == ()
    assert parsed.losing_ads == ()
    assert parsed.stats.total_winning == 0
    assert parsed.stats.total_losing == 0
    assert parsed.stats.win_rate == 0
    assert parsed.stats.date_range == "Not specified"
    assert len(parsed.audiences) == 4


def test_ad_lines_before_any_header_are_dropped():
    parsed = analyze_report("VS 1 - orphan\nWinning Ads:\nVS 2")
    assert parsed.winning_ads == ("VS 2",)
    assert parsed.losing_ads == ()


def test_non_ad_lines_are_dropped():
    parsed = analyze_report("Winning Ads:\nNotes about the week\nFB 12 - ignored\nReel - kept\n  pc 7 - kept too  ")
    assert parsed.winning_ads == ("Reel - kept", "pc 7 - kept too")


def test_ad_prefix_must_start_the_line():
    parsed = analyze_report("Winning Ads:\nNew VS 20\nVS 21")
    assert parsed.winning_ads == ("VS 21",)


def test_potential_winning_header():
    parsed = analyze_report("Potential Winning Ads:\nIG Reel - calm mind\nLosing:\nPC 3")
    assert parsed.winning_ads == ("IG Reel - calm mind",)
    assert parsed.losing_ads == ("PC 3",)


def test_header_wins_over_ad_line():
    """A line that looks like an ad but mentions a section is a header."""
    text = "Winning Ads:\nVS 1\nVS losing streak\nVS 2\nIG winning ads recap\nVS 3"
    parsed = analyze_report(text)
    assert parsed.winning_ads == ("VS 1", "VS 3")
    assert parsed.losing_ads == ("VS 2",)


def test_winning_header_checked_before_losing_header():
    parsed = analyze_report("Winning ads vs losing ads\nVS 1")
    assert parsed.winning_ads == ("VS 1",)


def test_win_rate_rounds_half_up():
    assert win_rate(1, 7) == 13  # 12.5
    assert win_rate(1, 1) == 50
    assert win_rate(0, 5) == 0
    assert win_rate(0, 0) == 0
    assert win_rate(3, 0) == 100


# ── Keywords ──


def test_keywords_from_winning_ads_only(sample):
    words = [k.word for k in sample.keywords]
    assert words == ["reiki", "cure", "illness"]
    assert "money" not in words
    assert "attraction" not in words


def test_keywords_skip_stopwords_and_short_tokens():
    parsed = analyze_report("Winning Ads:\nIG Reel - How one should heal from the pain with Reiki")
    words = [k.word for k in parsed.keywords]
    assert words == ["heal", "pain", "reiki"]


def test_equal_counts_normalize_to_one(sample):
    assert all(k.count == 1 for k in sample.keywords)
    assert all(k.normalized_count == 1 for k in sample.keywords)


def test_keyword_normalization_range():
    text = "Winning Ads:\nVS 1 reiki healing\nVS 2 reiki family\nVS 3 reiki healing"
    parsed = analyze_report(text)
    by_word = {k.word: k for k in parsed.keywords}
    assert [k.word for k in parsed.keywords] == ["reiki", "healing", "family"]
    assert by_word["reiki"].count == 3
    assert by_word["reiki"].normalized_count == 3
    assert by_word["healing"].normalized_count == 2
    assert by_word["family"].normalized_count == 1


def test_keywords_capped_at_eight_with_first_seen_ties():
    text = (
        "Winning Ads:\n"
        "VS 1 aaaa bbbb cccc dddd eeee ffff gggg hhhh iiii\n"
        "VS 2 aaaa"
    )
    parsed = analyze_report(text)
    words = [k.word for k in parsed.keywords]
    assert len(words) == 8
    assert words == ["aaaa", "bbbb", "cccc", "dddd", "eeee", "ffff", "gggg", "hhhh"]
    assert "iiii" not in words
    assert parsed.keywords[0].normalized_count == 3
    assert all(k.normalized_count == 1 for k in parsed.keywords[1:])


# ── Themes ──


def test_sample_themes(sample):
    themes = [(t.name, t.count) for t in sample.themes]
    assert themes == [("Health/Healing", 1), ("Money/Wealth", -0.5)]


def test_line_can_score_multiple_themes():
    parsed = analyze_report("Winning Ads:\nIG Reel about family bonding and health cures")
    scores = {t.name: t.count for t in parsed.themes}
    assert scores == {"Family/Parenting": 1, "Health/Healing": 1}


def test_home_counts_for_family_and_distance():
    parsed = analyze_report("Winning Ads:\nVS 5 - healing at home")
    scores = {t.name: t.count for t in parsed.themes}
    assert scores["Family/Parenting"] == 1
    assert scores["Distance/Convenience"] == 1
    assert scores["Health/Healing"] == 1


def test_losing_only_themes_are_negative():
    parsed = analyze_report("Underperforming Ads:\nVS 9 - family money")
    scores = {t.name: t.count for t in parsed.themes}
    assert scores == {"Family/Parenting": -0.5, "Money/Wealth": -0.5}


def test_cancelled_theme_is_filtered():
    parsed = analyze_report("Winning Ads:\nVS 1 money\nLosing Ads:\nVS 2 money\nVS 3 money")
    assert "Money/Wealth" not in {t.name for t in parsed.themes}


def test_themes_sorted_descending():
    text = (
        "Winning Ads:\nVS 1 calm energy\nVS 2 stress relief\nVS 3 family\n"
        "Underperforming:\nVS 4 lottery"
    )
    parsed = analyze_report(text)
    counts = [t.count for t in parsed.themes]
    assert counts == sorted(counts, reverse=True)
    assert parsed.themes[0].name == "Emotional"
    assert parsed.themes[0].count == 2
    assert parsed.themes[-1].name == "Money/Wealth"


# ── Formats ──


def test_sample_formats(sample):
    assert [(f.name, f.count) for f in sample.formats] == [
        ("IG Reels", 1),
        ("Video Sales (VS)", 1),
    ]


def test_format_priority_first_match_wins():
    assert classify_format("IG Reel vs static") == "IG Reels"
    assert classify_format("VS 12 - static pc") == "Video Sales (VS)"
    assert classify_format("PC 12 - static image") == "Static/PC"
    assert classify_format("Reel carousel") == "Carousel"
    assert classify_format("Reel 4 - morning") is None


def test_formats_only_count_winning_ads():
    parsed = analyze_report("Winning Ads:\nPC 1\nPC 2\nVS 3\nLosing:\nIG Reel 4")
    assert [(f.name, f.count) for f in parsed.formats] == [
        ("Static/PC", 2),
        ("Video Sales (VS)", 1),
    ]


# ── Record invariants ──


@pytest.mark.parametrize("text", [
    SAMPLE_REPORT,
    "",
    "Winning Ads:\n",
    "Losing:\nVS 1 money\nVS 2 proof\nIG Reel 3 energy",
    "Winning Ads:\n" + "\n".join(f"VS {i} word{i} reiki heal" for i in range(20)),
])
def test_invariants_hold(text):
    parsed = analyze_report(text)
    assert parsed.stats.total_winning == len(parsed.winning_ads)
    assert parsed.stats.total_losing == len(parsed.losing_ads)
    assert 0 <= parsed.stats.win_rate <= 100
    assert len(parsed.keywords) <= 8
    counts = [k.count for k in parsed.keywords]
    assert counts == sorted(counts, reverse=True)
    assert all(1 <= k.normalized_count <= 3 for k in parsed.keywords)
    assert all(t.count != 0 and t.name in THEME_NAMES for t in parsed.themes)
    assert all(f.count > 0 and f.name in FORMAT_NAMES for f in parsed.formats)
    format_counts = [f.count for f in parsed.formats]
    assert format_counts == sorted(format_counts, reverse=True)


def test_audiences_are_static_placeholder(sample):
    assert sample.audiences == PLACEHOLDER_AUDIENCES
    assert [(a.name, a.count) for a in sample.audiences] == [
        ("Parents", 35),
        ("Homemakers", 25),
        ("Coaching Interests", 20),
        ("Cold Audience", 20),
    ]


def test_analysis_is_deterministic():
    assert analyze_report(SAMPLE_REPORT) == analyze_report(SAMPLE_REPORT)


def test_parsed_data_is_immutable(sample):
    with pytest.raises(ValidationError):
        sample.stats = None


def test_json_dict_uses_camel_case(sample):
    data = sample.to_json_dict()
    assert data["winningAds"] == list(sample.winning_ads)
    assert data["stats"] == {
        "totalWinning": 2,
        "totalLosing": 1,
        "winRate": 67,
        "dateRange": "Sept 15 to Nov 26",
    }
    assert "normalizedCount" in data["keywords"][0]


# ── ReportAnalyzer ──


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_report_analyzer_rejects_blank(text):
    with pytest.raises(EmptyReportError):
        ReportAnalyzer().analyze(text)


def test_report_analyzer_matches_function():
    assert ReportAnalyzer().analyze(SAMPLE_REPORT) == analyze_report(SAMPLE_REPORT)
