# evrecharge/schemas.py
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Users
class UserCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: EmailStr
    role: Literal["user", "admin"] = "user"
    created_at: Optional[datetime] = None

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfile

# Stations
class Coordinates(BaseModel):
    lat: float
    lng: float

class Slot(BaseModel):
    time: str
    available: bool

class Bunk(BaseModel):
    id: str
    name: str
    status: Literal["available", "occupied", "maintenance"]

class StationCreate(BaseModel):
    name: str
    address: str
    city: str
    country: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    mobile_number: str

    @field_validator("name", "address", "city", "country", "mobile_number")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required")
        return value

class StationResponse(BaseModel):
    id: str
    name: str
    address: str
    city: str
    country: str
    coordinates: Coordinates
    mobile_number: str
    amenities: List[str] = []
    slots: List[Slot] = []
    rating: float
    review_count: int
    image_url: Optional[str] = None
    image_hint: Optional[str] = None
    image_path: str
    bunks: List[Bunk] = []
    created_at: Optional[datetime] = None

class StationDetailResponse(StationResponse):
    # comma-joined labels of the available slots, in slot order
    available_slots: str

class SlotToggleRequest(BaseModel):
    time: str

class ActionResult(BaseModel):
    success: bool
    message: str

class SeedResult(BaseModel):
    message: str
    created: int

# Bookings
class BookingCreate(BaseModel):
    station_id: str
    slot: Optional[str] = None

class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    station_id: str
    station_name: str
    slot: str
    booking_time: Optional[datetime] = None

# AI scheduling advisor
class SuggestionRequest(BaseModel):
    user_schedule: str = Field(..., min_length=10)
    charging_duration: str = Field(..., min_length=3)
    available_slots: str = ""

class SuggestionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_charging_times: str = Field(..., alias="suggestedChargingTimes")
    reasoning: str

class SuggestionResponse(BaseModel):
    message: str
    data: Optional[SuggestionResult] = None
    errors: Optional[Dict[str, List[str]]] = None

# Map
class MapMarker(BaseModel):
    id: str
    name: str
    address: str
    coordinates: Coordinates
    detail_url: str

class MapConfig(BaseModel):
    api_key: str
    center: Coordinates
    zoom: int
    markers: List[MapMarker]
