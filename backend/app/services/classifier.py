"""Keyword relevance filter, category assignment and investor metadata."""

import math
from collections.abc import Iterable

from app.constants.news_sources import (
    DEVELOPER_NAMES,
    DUBAI_AREAS,
    HIGH_VALUE_KEYWORDS,
    MEDIUM_VALUE_KEYWORDS,
)
from app.models.article import ArticleCategory

GOLDEN_VISA_TERMS = ("golden visa", "residency", "visa")
OFF_PLAN_TERMS = ("off-plan", "off plan", "launch", "handover")
REGULATION_TERMS = ("law", "regulation", "rera", "dld")


def _contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def matched_keywords(text: str, keywords: Iterable[str]) -> list[str]:
    """Keywords that occur as substrings of the lower-cased text, sorted."""
    text_lower = text.lower()
    return sorted(kw for kw in set(keywords) if kw and kw.lower() in text_lower)


def is_relevant(text: str, keywords: Iterable[str]) -> bool:
    """An item is relevant when at least one keyword appears in its text."""
    return bool(matched_keywords(text, keywords))


def categorize(text: str, developer_names: Iterable[str] = DEVELOPER_NAMES) -> ArticleCategory:
    """Assign one category; the first matching rule wins."""
    text_lower = text.lower()

    if _contains_any(text_lower, GOLDEN_VISA_TERMS):
        return ArticleCategory.GOLDEN_VISA
    if _contains_any(text_lower, OFF_PLAN_TERMS):
        return ArticleCategory.OFF_PLAN
    if _contains_any(text_lower, [*developer_names, "developer"]):
        return ArticleCategory.DEVELOPER_NEWS
    if _contains_any(text_lower, REGULATION_TERMS):
        return ArticleCategory.REGULATIONS
    return ArticleCategory.MARKET_TRENDS


def extract_affected_areas(content: str) -> list[str]:
    content_lower = content.lower()
    return [area for area in DUBAI_AREAS if area.lower() in content_lower]


def extract_affected_sectors(content: str) -> list[str]:
    content_lower = content.lower()
    sectors = []

    if _contains_any(content_lower, ("off-plan", "off plan", "launch")):
        sectors.append("off-plan")
    if _contains_any(content_lower, ("ready", "handover", "completed")):
        sectors.append("ready")
    if _contains_any(content_lower, ("rent", "lease", "tenant")):
        sectors.append("rental")
    if _contains_any(content_lower, ("commercial", "office", "retail")):
        sectors.append("commercial")
    if _contains_any(content_lower, ("luxury", "premium", "ultra")):
        sectors.append("luxury")

    return sectors


def calculate_investment_rating(title: str, content: str) -> int:
    """Score 1-5 from high- and medium-value keyword hits, starting at 2."""
    text = f"{title} {content}".lower()
    score = 2.0

    score += 0.5 * sum(1 for kw in HIGH_VALUE_KEYWORDS if kw in text)
    score += 0.25 * sum(1 for kw in MEDIUM_VALUE_KEYWORDS if kw in text)

    # Half rounds up
    return min(5, math.floor(score + 0.5))


def determine_urgency_level(title: str, content: str) -> str:
    text = f"{title} {content}".lower()

    if _contains_any(text, ("breaking", "just announced", "today")):
        return "high"
    if _contains_any(text, ("guide", "how to", "tips")):
        return "evergreen"
    return "normal"
