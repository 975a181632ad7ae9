"""Exceptions raised when a caller breaks an input precondition."""

from __future__ import annotations


class AdInsightError(ValueError):
    """Base class for ad insight input errors."""


class EmptyReportError(AdInsightError):
    def __init__(self) -> None:
        super().__init__("Report text is empty. Paste your report text first.")


class EmptyTopicError(AdInsightError):
    def __init__(self) -> None:
        super().__init__("Script topic is empty. Enter a topic first.")


class ConceptIndexError(AdInsightError):
    def __init__(self, index: int, total: int) -> None:
        super().__init__(f"Concept index {index} out of range (1-{total})")
        self.index = index
        self.total = total
