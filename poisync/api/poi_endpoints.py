"""Points of interest endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from poisync.core.dependencies import get_osm_credentials, get_poi_adapter
from poisync.schemas.base import Envelope
from poisync.schemas.poi import (
    LatLng,
    PoiListResponse,
    PointOfInterestExtended,
    TokenAndSecret,
)
from poisync.services.poi_adapter import OsmPointsOfInterestAdapter

router = APIRouter(prefix="/poi", tags=["poi"])


@router.get("", response_model=Envelope[PoiListResponse])
async def get_pois(
    north_east_lat: float = Query(..., alias="northEastLat"),
    north_east_lng: float = Query(..., alias="northEastLng"),
    south_west_lat: float = Query(..., alias="southWestLat"),
    south_west_lng: float = Query(..., alias="southWestLng"),
    categories: Optional[str] = Query(None, description="Comma separated categories"),
    language: Optional[str] = Query(None),
    adapter: OsmPointsOfInterestAdapter = Depends(get_poi_adapter),
):
    category_list: List[str] = [c.strip() for c in (categories or "").split(",") if c.strip()]
    pois = await adapter.get_pois(
        LatLng(lat=north_east_lat, lng=north_east_lng),
        LatLng(lat=south_west_lat, lng=south_west_lng),
        category_list,
        language or adapter.settings.default_language,
    )
    return Envelope[PoiListResponse](status="ok", data=PoiListResponse(pois=pois))


@router.get("/{poi_id}", response_model=Envelope[PointOfInterestExtended])
async def get_poi(
    poi_id: str,
    language: Optional[str] = Query(None),
    adapter: OsmPointsOfInterestAdapter = Depends(get_poi_adapter),
):
    poi = await adapter.get_poi_by_id(poi_id, language or adapter.settings.default_language)
    return Envelope[PointOfInterestExtended](status="ok", data=poi)


@router.post("", response_model=Envelope[dict])
async def create_poi(
    poi: PointOfInterestExtended,
    language: Optional[str] = Query(None),
    credentials: TokenAndSecret = Depends(get_osm_credentials),
    adapter: OsmPointsOfInterestAdapter = Depends(get_poi_adapter),
):
    poi_id = await adapter.create_poi(poi, credentials, language or adapter.settings.default_language)
    return Envelope[dict](status="ok", data={"id": poi_id})


@router.put("/{poi_id}", response_model=Envelope[dict])
async def update_poi(
    poi_id: str,
    poi: PointOfInterestExtended,
    language: Optional[str] = Query(None),
    credentials: TokenAndSecret = Depends(get_osm_credentials),
    adapter: OsmPointsOfInterestAdapter = Depends(get_poi_adapter),
):
    updated_id = await adapter.update_poi(
        poi.model_copy(update={"id": poi_id}),
        credentials,
        language or adapter.settings.default_language,
    )
    return Envelope[dict](status="ok", data={"id": updated_id})
