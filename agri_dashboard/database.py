"""
Database connection setup for PostgreSQL/PostGIS
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from .config import settings
import logging

# Create the SQLAlchemy engine
engine = create_engine(
    **settings.database_config
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """
    Dependency to get database session
    Use with FastAPI Depends()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def fetch_rows(db: Session, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Run a parameterized query and return plain dict rows"""
    result = db.execute(text(sql), params or {})
    return [dict(row) for row in result.mappings().all()]

def test_connection():
    """Test database connection"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logging.error(f"Database connection test failed: {e}")
        return False
