"""Booking ledger: append-only booking records."""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from evrecharge.errors import BookingError, StationNotFoundError, ValidationFailedError
from evrecharge.models import Booking, Station, User

logger = logging.getLogger(__name__)


class BookingService:
    def __init__(self, db: Session):
        self.db = db

    def create_booking(self, user: User, station_id: str, slot: Optional[str]) -> Booking:
        """Record a booking of ``slot`` at ``station_id`` for ``user``.

        The slot's availability flag is not consulted and not changed, so two
        users may book the same label.
        """
        if not slot or not slot.strip():
            raise ValidationFailedError("Please select a time slot before booking.")

        station = self.db.query(Station).filter(Station.id == station_id).first()
        if station is None:
            raise StationNotFoundError()

        if slot not in {s["time"] for s in station.slots or []}:
            raise ValidationFailedError(f"{slot} is not a time slot offered by {station.name}.")

        booking = Booking(
            user_id=user.id,
            station_id=station.id,
            station_name=station.name,
            slot=slot,
        )
        try:
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Booking failed for user {user.id} at station {station_id}: {e}")
            raise BookingError()

        logger.info(f"Booking {booking.id}: user {user.id} booked {slot} at {station.name}")
        return booking

    def list_user_bookings(self, user: User) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.user_id == user.id)
            .order_by(Booking.booking_time.desc())
            .all()
        )
