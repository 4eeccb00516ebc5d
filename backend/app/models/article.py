"""News article model for PostgreSQL."""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, Text
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel


class ArticleCategory(str, Enum):
    """Fixed category taxonomy, listed in classification precedence order."""

    GOLDEN_VISA = "golden_visa"
    OFF_PLAN = "off_plan"
    DEVELOPER_NEWS = "developer_news"
    REGULATIONS = "regulations"
    MARKET_TRENDS = "market_trends"


class NewsArticle(SQLModel, table=True):
    """
    Article ingested from an RSS/Atom feed.
    Rows are insert-only for the sync pipeline; source_hash is the dedup key.
    """

    __tablename__ = "news_articles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Article content
    title: str = Field(max_length=500)
    excerpt: str = Field(default="")
    content: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    image_url: str | None = Field(default=None, max_length=2048)

    # Provenance
    source_name: str = Field(max_length=200)
    source_url: str = Field(max_length=2048)
    source_hash: str = Field(max_length=64, unique=True, index=True)

    # Classification
    category: ArticleCategory = Field(
        default=ArticleCategory.MARKET_TRENDS,
        sa_column=Column(
            SAEnum(
                ArticleCategory,
                name="article_category",
                values_callable=lambda members: [m.value for m in members],
            ),
            nullable=False,
        ),
    )
    article_type: str = Field(default="headline", max_length=20)  # headline, featured
    status: str = Field(default="published", max_length=20)

    # Investor metadata
    reading_time_minutes: int = Field(default=2)
    investment_rating: int = Field(default=2, ge=1, le=5)
    urgency_level: str = Field(default="normal", max_length=20)  # high, normal, evergreen
    affected_areas: list[str] | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    affected_sectors: list[str] | None = Field(
        default=None, sa_column=Column(JSON, nullable=True)
    )

    # Timestamps
    published_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
