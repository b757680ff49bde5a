import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..database import fetch_rows
from ..models import AgricultureLandRecord, BoundaryFeature, MapLevel, StationRecord

logger = logging.getLogger(__name__)

BOUNDARY_QUERIES = {
    MapLevel.REGION: """
        SELECT
            gid,
            adm1_en AS name,
            adm1_pcode AS code,
            ST_AsGeoJSON(geom) AS geometry
        FROM region
        ORDER BY adm1_en
    """,
    MapLevel.ZONE: """
        SELECT
            gid,
            adm2_en AS name,
            adm2_pcode AS code,
            adm1_en AS region_name,
            adm1_pcode AS region_code,
            ST_AsGeoJSON(geom) AS geometry
        FROM zone
        ORDER BY adm2_en
    """,
    MapLevel.WOREDA: """
        SELECT
            gid,
            adm3_en AS name,
            adm3_pcode AS code,
            adm2_en AS zone_name,
            adm2_pcode AS zone_code,
            adm1_en AS region_name,
            adm1_pcode AS region_code,
            ST_AsGeoJSON(geom) AS geometry
        FROM woreda
        ORDER BY adm3_en
        LIMIT :limit
    """,
}

STATIONS_QUERY = """
    SELECT
        id,
        ST_AsGeoJSON(geom) AS geometry
    FROM stations
    ORDER BY id ASC
"""

AGRICULTURE_LANDS_QUERY = """
    SELECT
        id,
        name,
        region,
        major_crops,
        land_size,
        soil_type,
        suitability,
        challenges,
        image,
        ST_AsGeoJSON(geom) AS geometry
    FROM agricultural_lands
    ORDER BY id
"""

def parse_geometry(raw: Any) -> Optional[Dict[str, Any]]:
    """ST_AsGeoJSON text to a dict; unreadable geometry becomes None"""
    if raw is None or isinstance(raw, dict):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding unparseable geometry")
        return None

def _with_geometry(row: Dict[str, Any]) -> Dict[str, Any]:
    return {**row, "geometry": parse_geometry(row.get("geometry"))}

def get_features(db: Session, level: MapLevel) -> List[BoundaryFeature]:
    """All boundary features for one administrative level"""
    params = {"limit": settings.WOREDA_LIMIT} if level == MapLevel.WOREDA else {}
    rows = fetch_rows(db, BOUNDARY_QUERIES[level], params)
    features = []
    for row in rows:
        if not row.get("code"):
            logger.warning(f"Skipping {level.value} boundary {row.get('gid')} with no pcode")
            continue
        features.append(BoundaryFeature(**_with_geometry(row), level=level))
    logger.info(f"Fetched {len(features)} {level.value} boundaries")
    return features

def get_stations(db: Session) -> List[StationRecord]:
    rows = fetch_rows(db, STATIONS_QUERY)
    return [StationRecord(**_with_geometry(row)) for row in rows]

def get_agriculture_lands(db: Session) -> List[AgricultureLandRecord]:
    rows = fetch_rows(db, AGRICULTURE_LANDS_QUERY)
    return [AgricultureLandRecord(**_with_geometry(row)) for row in rows]
