"""Load demo listings into the parking store for local runs.

The rows mirror an export from the old document store, so availability
flags and coordinates arrive as text and go through the same
normalization as any other import.
"""
import logging
import uuid

from shared.core.config import settings
from shared.core.database import Base, DatabaseClient
from shared.core.logging_config import setup_logging
from parking_service.app import models  # noqa: F401
from parking_service.app.crud.space_crud import import_spaces
from parking_service.app.models.spaces import Space

logger = logging.getLogger(__name__)

DEMO_HOST_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")

DEMO_SPACES = [
    {
        "host_id": DEMO_HOST_ID,
        "title": "Secure driveway near Kennington Park",
        "description": "Gated driveway, two minutes from Kennington tube.",
        "location": "Kennington, London",
        "postcode": "SE17 3RY",
        "address": "12 Penton Place, London",
        "latitude": "51.4886",
        "longitude": "-0.1004",
        "what3words": "///shades.vine.rising",
        "available_days": "Mon-Sun",
        "price_per_hour": "2.50",
        "price_per_day": "12.50",
        "price_per_week": "60",
        "price_per_month": "210",
        "total_spaces": "2",
        "available_from": "2025-01-01",
        "available_to": "2026-12-31",
        "is_available": "true",
        "features": "gated, cctv, ev charging",
        "image_url": "https://images.parkpal.example/kennington.jpg",
    },
    {
        "host_id": DEMO_HOST_ID,
        "title": "Borough Market garage bay",
        "description": "Underground bay, height limit 2.1m.",
        "location": "Borough, London",
        "postcode": "SE1 9AL",
        "address": "8 Southwark Street, London",
        "latitude": "51.5054",
        "longitude": "-0.0910",
        "what3words": "///crowd.tiles.ready",
        "available_days": "Mon-Fri",
        "price_per_hour": "4",
        "price_per_day": "22",
        "price_per_week": "110",
        "price_per_month": "380",
        "total_spaces": 5,
        "available_from": "2025-01-01",
        "available_to": "2026-12-31",
        "is_available": True,
        "features": "covered; 24h access",
        "image_url": "https://images.parkpal.example/borough.jpg",
    },
    {
        "host_id": DEMO_HOST_ID,
        "title": "Elephant & Castle side street space",
        "location": "Elephant and Castle, London",
        "postcode": "SE1 6TE",
        "address": "3 Brook Drive, London",
        "latitude": "51.4946",
        "longitude": "-0.1008",
        "available_days": "Weekends",
        "price_per_hour": "1.80",
        "price_per_day": "9",
        "price_per_week": "45",
        "price_per_month": "150",
        "total_spaces": 1,
        "available_from": "2025-01-01",
        "available_to": "2026-12-31",
        "is_available": "False",
        "features": "permit zone",
        "image_url": "https://images.parkpal.example/elephant.jpg",
    },
]


def seed_data():
    client = DatabaseClient(settings.parking_database_url, Base)
    client.create_all()
    db = client.SessionLocal()
    try:
        if db.query(Space).count():
            logger.info("Spaces already present, skipping seed")
            return []
        return import_spaces(db, DEMO_SPACES)
    finally:
        db.close()
        client.dispose()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    seed_data()
