from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class PointOfInterest(BaseModel):
    """Read projection of a search index feature."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    source: str = "OSM"
    location: LatLng
    category: str = "Other"
    icon: str = ""
    icon_color: str = "black"
    title: str = ""
    description: str = ""
    image_url: str = ""
    url: str = ""


class PointOfInterestExtended(PointOfInterest):
    """Point of interest with the editable raw values and source specific data."""
    is_editable: bool = False
    tags: Dict[str, str] = Field(default_factory=dict)
    websites: List[str] = Field(default_factory=list)


class PoiListResponse(BaseModel):
    pois: List[PointOfInterest]


class TokenAndSecret(BaseModel):
    """OSM credentials, passed through to the gateway untouched."""
    model_config = ConfigDict(frozen=True)

    token: SecretStr
    secret: SecretStr = SecretStr("")
