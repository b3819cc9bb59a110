# evrecharge/routes/stations.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from evrecharge import schemas
from evrecharge.config import Settings
from evrecharge.dependencies import get_settings, get_station_service
from evrecharge.errors import StationNotFoundError
from evrecharge.services.stations import StationService, serialize_station, station_detail

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stations"])

MAP_CENTER = schemas.Coordinates(lat=20.5937, lng=78.9629)
MAP_ZOOM = 5

# Public - List / Search Stations
@router.get("/stations", response_model=List[schemas.StationResponse])
def list_stations(q: Optional[str] = None, service: StationService = Depends(get_station_service)):
    return [serialize_station(s) for s in service.search_stations(q)]

# Public - Station Detail with chronologically ordered slots
@router.get("/stations/{station_id}", response_model=schemas.StationDetailResponse)
def get_station(station_id: str, service: StationService = Depends(get_station_service)):
    try:
        station = service.get_station(station_id)
    except StationNotFoundError:
        raise HTTPException(status_code=404, detail="Station not found")
    return station_detail(station)

# Public - Map markers; a missing maps key is a configuration error, not a crash
@router.get("/map/stations", response_model=schemas.MapConfig)
def map_stations(
    service: StationService = Depends(get_station_service),
    settings: Settings = Depends(get_settings),
):
    if not settings.GOOGLE_MAPS_API_KEY:
        logger.error("GOOGLE_MAPS_API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Configuration Error: the Google Maps API key is missing.",
        )

    markers = [
        schemas.MapMarker(
            id=s.id,
            name=s.name,
            address=s.address,
            coordinates=schemas.Coordinates(lat=s.latitude, lng=s.longitude),
            detail_url=f"/stations/{s.id}",
        )
        for s in service.search_stations()
    ]
    return schemas.MapConfig(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        center=MAP_CENTER,
        zoom=MAP_ZOOM,
        markers=markers,
    )
