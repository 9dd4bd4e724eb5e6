"""
Table definitions for the shops store.

Uses SQLAlchemy Core metadata so the same schema works on SQLite
(development, tests) and PostgreSQL (production).
"""

import logging

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from shopdesk.domain.shops.entities import TITLE_MAX_LENGTH, URL_MAX_LENGTH

logger = logging.getLogger(__name__)

metadata = MetaData()

shops_table = Table(
    "shops",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(TITLE_MAX_LENGTH), nullable=False),
    Column("url", String(URL_MAX_LENGTH), nullable=False, unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


def ensure_schema(engine: Engine) -> None:
    """Create the shops tables if they do not exist yet."""
    metadata.create_all(engine)
    logger.info("Shop schema ready on %s", engine.url.render_as_string(hide_password=True))
