"""Article service - insert-only persistence of synced news articles."""

import math
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import PipelineConfig
from app.models import NewsArticle
from app.schemas.news import Enrichment, RelevantItem
from app.services.classifier import (
    calculate_investment_rating,
    determine_urgency_level,
    extract_affected_areas,
    extract_affected_sectors,
)


class ArticleStore(Protocol):
    """What the sync pipeline needs from the article store."""

    async def exists(self, source_hash: str) -> bool: ...

    async def insert(self, article: NewsArticle) -> NewsArticle: ...


class ArticleRepository:
    """PostgreSQL-backed ArticleStore."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, source_hash: str) -> bool:
        """Check whether an article with this fingerprint is already stored."""
        result = await self.session.execute(
            select(NewsArticle.id).where(NewsArticle.source_hash == source_hash).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def insert(self, article: NewsArticle) -> NewsArticle:
        """Insert a new article; the session is rolled back if the insert fails."""
        self.session.add(article)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        await self.session.refresh(article)
        return article


def word_count(text: str) -> int:
    return len(text.split())


def reading_time_minutes(content: str | None, config: PipelineConfig | None = None) -> int:
    """Minutes to read the enriched content, or the fixed fallback without it."""
    config = config or PipelineConfig()
    if content is None:
        return config.default_reading_minutes
    return math.ceil(word_count(content) / config.words_per_minute)


def build_article(
    item: RelevantItem,
    enrichment: Enrichment,
    config: PipelineConfig | None = None,
) -> NewsArticle:
    """Assemble the row to insert from a relevant item and its enrichment."""
    full_text = f"{item.title} {item.excerpt} {enrichment.content or ''}"
    affected_areas = extract_affected_areas(full_text)
    affected_sectors = extract_affected_sectors(full_text)

    return NewsArticle(
        title=item.title,
        excerpt=item.excerpt,
        source_name=item.source_name,
        source_url=item.source_url,
        source_hash=item.source_hash,
        image_url=enrichment.image_url,
        content=enrichment.content,
        category=item.category,
        article_type="headline",
        status="published",
        published_at=item.published_at,
        reading_time_minutes=reading_time_minutes(enrichment.content, config),
        investment_rating=calculate_investment_rating(item.title, full_text),
        urgency_level=determine_urgency_level(item.title, full_text),
        affected_areas=affected_areas or None,
        affected_sectors=affected_sectors or None,
        created_at=datetime.now(UTC),
    )
