# evrecharge/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from evrecharge.config import Settings
from evrecharge.database import get_db
from evrecharge.services.advisor import SchedulingAdvisor
from evrecharge.services.availability import AvailabilityService
from evrecharge.services.bookings import BookingService
from evrecharge.services.change_feed import ChangeFeed
from evrecharge.services.stations import StationService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_change_feed(request: Request) -> ChangeFeed:
    return request.app.state.change_feed


def get_advisor(request: Request) -> SchedulingAdvisor:
    return request.app.state.advisor


def get_station_service(
    request: Request,
    db: Session = Depends(get_db),
    feed: ChangeFeed = Depends(get_change_feed),
) -> StationService:
    return StationService(db, feed, rng=request.app.state.rng)


def get_availability_service(db: Session = Depends(get_db), feed: ChangeFeed = Depends(get_change_feed)) -> AvailabilityService:
    return AvailabilityService(db, feed)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)
