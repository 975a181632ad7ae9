"""Report text analysis."""

from ad_insight.analyzer.report_analyzer import ReportAnalyzer, analyze_report

__all__ = ["ReportAnalyzer", "analyze_report"]
