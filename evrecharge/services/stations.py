"""Station directory and station administration."""

import copy
import logging
import random
import re
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from evrecharge import seed_data
from evrecharge.errors import SeedingRefusedError, StationNotFoundError, StationWriteError
from evrecharge.models import Station
from evrecharge.schemas import Coordinates, StationCreate, StationDetailResponse, StationResponse
from evrecharge.services.change_feed import ADDED, REMOVED, ChangeFeed, StationChange

logger = logging.getLogger(__name__)

SLOTS_PER_STATION = 8
FIRST_SLOT_HOUR = 9
BLOCKED_SLOTS = 2

DEFAULT_RATING = 5
DEFAULT_REVIEW_COUNT = 1
DEFAULT_IMAGE_URL = "https://placehold.co/600x400.png"
DEFAULT_IMAGE_HINT = "electric car"
DEFAULT_AMENITIES = ["Wi-Fi", "Restroom"]
DEFAULT_BUNKS = [{"id": "bunk-1", "name": "Bunk 1", "status": "available"}]

DEFAULT_STATION_IMAGE = "/default-station.jpg"
STATION_IMAGES = {
    "athergridkoramangala": "Ather Grid - Koramangala.webp",
    "chargegridmumbai": "ChargeGrid Mumbai.jpg",
    "chargepointcanarywharf": "ChargePoint - Canary Wharf.jpeg",
    "ecochargecentral": "EcoCharge Central.jfif",
    "goacoastalcharge": "Goa Coastal Charge.jpeg",
    "hitechpowergrid": "Hitech Power Grid.jpg",
    "ionitycharginghubalexanderplatz": "Ionity Charging Hub - Alexanderplatz.jpg",
    "marinapowerhub": "Marina Power Hub.jpg",
    "nagpurev": "NagpurEV.jpg",
    "okinawaev": "Okinawa EV.jpg",
    "paradisechargekashmir": "Paradise Charge Kashmir.jpg",
    "parisvolttoureiffel": "Paris-Volt - Tour Eiffel.jpg",
    "powerupplaza": "PowerUp Plaza.jpg",
    "patnaevcharger": "Patna EV Charger.jpg",
    "punepowerpoint": "Pune Power Point.jpg",
    "sydneyharbourefill": "Sydney Harbour E-Fill.jpg",
    "tatapowerezchargeconnaughtplace": "Tata Power EZ Charge - Connaught Place.jpg",
    "tokyoevfastcharge": "Tokyo EV Fast Charge.jpg",
    "voltvalley": "Volt Valley.jpg",
}


# ============================================================================
# PURE HELPERS
# ============================================================================


def filter_stations(stations: Iterable, query: Optional[str]) -> list:
    """Case-insensitive substring search over name, city, country and address.

    A blank query returns every station.
    """
    stations = list(stations)
    if not query or not query.strip():
        return stations
    needle = query.lower()
    return [
        s for s in stations
        if needle in s.name.lower()
        or needle in s.city.lower()
        or needle in s.country.lower()
        or needle in s.address.lower()
    ]


def slot_label(hour24: int) -> str:
    period = "PM" if hour24 >= 12 else "AM"
    hour12 = hour24 % 12 or 12
    return f"{hour12:02d}:00 {period}"


def generate_slots(rng: Optional[random.Random] = None) -> List[dict]:
    """Eight hourly slots from 09:00 AM, exactly two of them blocked at random."""
    rng = rng or random.Random()
    slots = [
        {"time": slot_label(FIRST_SLOT_HOUR + i), "available": True}
        for i in range(SLOTS_PER_STATION)
    ]
    for index in rng.sample(range(len(slots)), BLOCKED_SLOTS):
        slots[index]["available"] = False
    return slots


def _slot_sort_key(slot: dict):
    try:
        return (0, datetime.strptime(slot["time"].strip(), "%I:%M %p").time())
    except ValueError:
        # free-text labels keep their stored order, after the clock times
        return (1, datetime.min.time())


def sort_slots(slots: Iterable[dict]) -> List[dict]:
    return sorted(slots, key=_slot_sort_key)


def station_image_path(name: str) -> str:
    normalized = re.sub(r"[^a-z0-9]", "", name.lower())
    file_name = STATION_IMAGES.get(normalized)
    if file_name:
        return "/" + file_name.replace(" ", "%20")
    return DEFAULT_STATION_IMAGE


def serialize_station(station: Station) -> StationResponse:
    return StationResponse(
        id=station.id,
        name=station.name,
        address=station.address,
        city=station.city,
        country=station.country,
        coordinates=Coordinates(lat=station.latitude, lng=station.longitude),
        mobile_number=station.mobile_number,
        amenities=station.amenities or [],
        slots=station.slots or [],
        rating=station.rating,
        review_count=station.review_count,
        image_url=station.image_url,
        image_hint=station.image_hint,
        image_path=station_image_path(station.name),
        bunks=station.bunks or [],
        created_at=station.created_at,
    )


def station_detail(station: Station) -> StationDetailResponse:
    slots = sort_slots(station.slots or [])
    base = serialize_station(station).model_dump()
    base["slots"] = slots
    return StationDetailResponse(
        **base,
        available_slots=", ".join(s["time"] for s in slots if s["available"]),
    )


# ============================================================================
# SERVICE
# ============================================================================


class StationService:
    """Station reads for the directory and station writes for the admin console."""

    def __init__(self, db: Session, feed: ChangeFeed, rng: Optional[random.Random] = None):
        self.db = db
        self.feed = feed
        self.rng = rng or random.Random()

    def list_stations(self) -> List[Station]:
        return self.db.query(Station).all()

    def search_stations(self, query: Optional[str] = None) -> List[Station]:
        try:
            stations = self.list_stations()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching stations: {e}")
            return []
        return filter_stations(stations, query)

    def get_station(self, station_id: str) -> Station:
        station = self.db.query(Station).filter(Station.id == station_id).first()
        if not station:
            raise StationNotFoundError()
        return station

    def create_station(self, data: StationCreate) -> Station:
        station = Station(
            name=data.name,
            address=data.address,
            city=data.city,
            country=data.country,
            latitude=data.latitude,
            longitude=data.longitude,
            mobile_number=data.mobile_number,
            rating=DEFAULT_RATING,
            review_count=DEFAULT_REVIEW_COUNT,
            image_url=DEFAULT_IMAGE_URL,
            image_hint=DEFAULT_IMAGE_HINT,
            amenities=list(DEFAULT_AMENITIES),
            bunks=[dict(b) for b in DEFAULT_BUNKS],
            slots=generate_slots(self.rng),
        )
        try:
            self.db.add(station)
            self.db.commit()
            self.db.refresh(station)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error adding station {data.name}: {e}")
            raise StationWriteError("Could not add station.")
        logger.info(f"Station {station.id} ({station.name}) created")
        self.feed.publish(StationChange(station.id, ADDED, serialize_station(station).model_dump(mode="json")))
        return station

    def delete_station(self, station_id: str) -> None:
        # bookings referencing the station are left in place
        station = self.get_station(station_id)
        try:
            self.db.delete(station)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting station {station_id}: {e}")
            raise StationWriteError("Could not delete station.")
        logger.info(f"Station {station_id} deleted")
        self.feed.publish(StationChange(station_id, REMOVED))

    def seed_stations(self, fixture: Optional[List[dict]] = None) -> int:
        """Insert the static fixture once; refuses when any station exists."""
        if self.db.query(Station).first() is not None:
            logger.warning("Seeding refused: stations collection is not empty")
            raise SeedingRefusedError()

        fixture = seed_data.STATIONS if fixture is None else fixture
        stations = []
        try:
            for item in fixture:
                item = copy.deepcopy(item)
                coordinates = item.pop("coordinates")
                station = Station(latitude=coordinates["lat"], longitude=coordinates["lng"], **item)
                self.db.add(station)
                stations.append(station)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error seeding stations: {e}")
            raise StationWriteError("Seeding failed. No stations were added.")

        for station in stations:
            self.db.refresh(station)
            self.feed.publish(StationChange(station.id, ADDED, serialize_station(station).model_dump(mode="json")))
        logger.info(f"Seeded {len(stations)} stations")
        return len(stations)
