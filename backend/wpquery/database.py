import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from wpquery.config import WordPressSettings
from wpquery.services.query_service import QueryService

logger = logging.getLogger(__name__)

_settings: Optional[WordPressSettings] = None
_engine: Optional[AsyncEngine] = None
_service: Optional[QueryService] = None


def create_engine_from_settings(settings: WordPressSettings) -> AsyncEngine:
    """Create the async engine; pooling and timeouts belong to the driver"""
    url = settings.sqlalchemy_url()
    return create_async_engine(url, echo=settings.sql_echo)


def get_settings() -> WordPressSettings:
    global _settings
    if _settings is None:
        _settings = WordPressSettings.from_env()
    return _settings


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_engine_from_settings(get_settings())
        logger.info("Database engine created (prefix=%s)", get_settings().wp_prefix)
    return _engine


def get_query_service() -> QueryService:
    """Get the process-wide query service (FastAPI dependency)"""
    global _service
    if _service is None:
        _service = QueryService(get_settings(), get_engine())
    return _service


async def dispose_engine() -> None:
    """Release pooled connections on shutdown"""
    global _engine, _service
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _service = None
