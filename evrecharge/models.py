# evrecharge/models.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, func

from evrecharge.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=new_id)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")  # "user" or "admin"
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Station(Base):
    __tablename__ = "stations"
    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    country = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    mobile_number = Column(String, nullable=False)
    amenities = Column(JSON, default=list)
    # [{"time": "09:00 AM", "available": true}, ...]
    slots = Column(JSON, default=list)
    rating = Column(Float, default=5)
    review_count = Column(Integer, default=1)
    image_url = Column(String, nullable=True)
    image_hint = Column(String, nullable=True)
    # [{"id": "bunk-1", "name": "Bunk 1", "status": "available"}, ...]
    bunks = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Booking(Base):
    __tablename__ = "bookings"
    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    # No foreign key: deleting a station keeps its bookings
    station_id = Column(String, index=True, nullable=False)
    station_name = Column(String, nullable=False)
    slot = Column(String, nullable=False)
    booking_time = Column(DateTime(timezone=True), default=utcnow)
