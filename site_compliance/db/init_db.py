"""
Schema bootstrap for local development (DB_AUTO_CREATE=true)
"""
from sqlalchemy import Engine, text

from atams.db import Base
from atams.logging import get_logger

from site_compliance.models import SCHEMA

logger = get_logger(__name__)


def init_db(engine: Engine) -> None:
    """Create the compliance schema and all tables if they do not exist"""
    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {SCHEMA}"))

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables ensured in schema '{SCHEMA}'")
