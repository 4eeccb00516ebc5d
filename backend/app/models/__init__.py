"""Models package - SQLModel database models."""

from app.models.article import ArticleCategory, NewsArticle

__all__ = ["ArticleCategory", "NewsArticle"]
