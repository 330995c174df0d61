from sqlalchemy import Column, String, Float, JSON

from poisync.core.db import Base


class PoiFeatureRecord(Base):
    """One search index document per OSM element."""
    __tablename__ = "poi_features"

    id = Column(String(64), primary_key=True)
    source = Column(String(32), primary_key=True)
    category = Column(String(64), nullable=False, index=True)
    latitude = Column(Float, nullable=False, index=True)
    longitude = Column(Float, nullable=False, index=True)
    document = Column(JSON, nullable=False)
