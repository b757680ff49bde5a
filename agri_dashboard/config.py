"""
Configuration for the Ethiopia Agricultural Data Dashboard
Environment-driven settings for PostgreSQL/PostGIS deployments
"""

import os
from typing import Dict, Optional
from urllib.parse import quote_plus
import logging

class Settings:
    """Application settings read from the environment"""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database - either a full URL or the discrete DB_* variables
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_HOST: Optional[str] = os.getenv("DB_HOST")
    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_NAME: Optional[str] = os.getenv("DB_NAME")
    DB_PASS: Optional[str] = os.getenv("DB_PASS")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Ethiopia Agricultural Data Dashboard"
    VERSION: str = "1.0.0"

    # CORS
    ALLOWED_HOSTS: list = os.getenv("ALLOWED_HOSTS", "*").split(",")

    # Map canvas and territory (Ethiopia, approximate)
    MAP_CANVAS_WIDTH: int = int(os.getenv("MAP_CANVAS_WIDTH", "800"))
    MAP_CANVAS_HEIGHT: int = int(os.getenv("MAP_CANVAS_HEIGHT", "600"))
    MAP_MIN_LNG: float = 32.5
    MAP_MAX_LNG: float = 48.0
    MAP_MIN_LAT: float = 3.0
    MAP_MAX_LAT: float = 15.0

    # Choropleth defaults
    DEFAULT_BASE_COLOR: str = os.getenv("DEFAULT_BASE_COLOR", "#dc2626")
    DEFAULT_COLOR_BINS: int = int(os.getenv("DEFAULT_COLOR_BINS", "6"))
    FALLBACK_COLOR: str = "#e5e7eb"
    COLOR_SCHEMES: Dict[str, str] = {
        "red": "#dc2626",
        "blue": "#2563eb",
        "green": "#16a34a",
        "orange": "#ea580c",
        "purple": "#9333ea",
    }

    # Boundary queries
    WOREDA_LIMIT: int = int(os.getenv("WOREDA_LIMIT", "1100"))

    # Dashboard client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", "25"))

    def __init__(self):
        """Initialize settings and validate configuration"""
        self.validate_configuration()
        self.setup_logging()

    def validate_configuration(self):
        """Validate required configuration"""

        if not self.DATABASE_URL:
            if all([self.DB_HOST, self.DB_USER, self.DB_NAME]):
                self.DATABASE_URL = self.build_database_url()
            else:
                # The HTTP client and scripts run without a database
                logging.warning("Database not configured; only the API client is usable")

        if self.DEFAULT_BASE_COLOR.lower() not in (c.lower() for c in self.COLOR_SCHEMES.values()):
            logging.warning(f"DEFAULT_BASE_COLOR {self.DEFAULT_BASE_COLOR} is not one of the named color schemes")

    def build_database_url(self) -> str:
        """Assemble a PostgreSQL URL from the discrete DB_* variables"""
        password = f":{quote_plus(self.DB_PASS)}" if self.DB_PASS else ""
        return f"postgresql+psycopg2://{self.DB_USER}{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    def setup_logging(self):
        """Configure logging based on environment"""

        log_level = getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

        if self.ENVIRONMENT == "production":
            # Production logging - structured JSON
            logging.basicConfig(
                level=log_level,
                format='{"timestamp": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}',
                handlers=[logging.StreamHandler()]
            )
        else:
            # Development logging - readable format
            logging.basicConfig(
                level=log_level,
                format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                handlers=[logging.StreamHandler()]
            )

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def database_config(self) -> dict:
        """Get database configuration for SQLAlchemy"""
        if not self.DATABASE_URL:
            raise ValueError(
                "Database not configured. Set DATABASE_URL or DB_HOST, DB_USER, DB_NAME, DB_PASS and DB_PORT."
            )

        config = {
            "url": self.DATABASE_URL,
            "pool_pre_ping": True,
            "echo": self.ENVIRONMENT == "development"
        }

        # SQLite uses its own single-connection pools
        if not self.is_sqlite:
            config.update({
                "pool_recycle": 3600,  # Recycle connections after 1 hour
                "pool_size": 5,
                "max_overflow": 10,
            })

        return config

    @property
    def map_config(self) -> dict:
        """Canvas and bounding box for the geo projector"""
        return {
            "canvas_width": self.MAP_CANVAS_WIDTH,
            "canvas_height": self.MAP_CANVAS_HEIGHT,
            "min_lng": self.MAP_MIN_LNG,
            "max_lng": self.MAP_MAX_LNG,
            "min_lat": self.MAP_MIN_LAT,
            "max_lat": self.MAP_MAX_LAT,
        }

    def resolve_base_color(self, color_scheme: Optional[str] = None, base_color: Optional[str] = None) -> str:
        """Explicit base color wins over a named scheme, then the default"""
        if base_color:
            return base_color
        if color_scheme and color_scheme in self.COLOR_SCHEMES:
            return self.COLOR_SCHEMES[color_scheme]
        return self.DEFAULT_BASE_COLOR

# Create global settings instance
settings = Settings()

# Export commonly used values
DATABASE_URL = settings.DATABASE_URL
ENVIRONMENT = settings.ENVIRONMENT
