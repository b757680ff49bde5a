"""
Administrative boundary and point layer endpoints
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import MapLevel, list_response
from ..services.boundary_service import get_agriculture_lands, get_features, get_stations

router = APIRouter(tags=["boundaries"])
logger = logging.getLogger(__name__)

@router.get("/boundaries/{level}")
async def list_boundaries(level: str, db: Session = Depends(get_db)):
    """
    Region, zone or woreda polygons with GeoJSON geometry
    """
    try:
        map_level = MapLevel(level)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown boundary level: {level}")

    try:
        return list_response(get_features(db, map_level))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching {level} data: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch {level} data: {str(e)}")

@router.get("/stations")
async def list_stations(db: Session = Depends(get_db)):
    """Weather station points"""
    try:
        return list_response(get_stations(db))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching weather stations: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch weather station data: {str(e)}")

@router.get("/agriculture-lands")
async def list_agriculture_lands(db: Session = Depends(get_db)):
    """Agricultural land sites with suitability notes"""
    try:
        return list_response(get_agriculture_lands(db))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching agricultural lands: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch agricultural lands data: {str(e)}")
