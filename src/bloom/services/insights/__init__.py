"""Insight generation behind a swappable provider interface."""

from bloom.services.insights.provider import InsightProvider, RuleBasedInsightProvider

__all__ = ["InsightProvider", "RuleBasedInsightProvider"]
