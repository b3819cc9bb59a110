"""Slot availability toggling."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from evrecharge.errors import SlotUpdateError, StationNotFoundError, ValidationFailedError
from evrecharge.models import Station
from evrecharge.services.change_feed import MODIFIED, ChangeFeed, StationChange
from evrecharge.services.stations import serialize_station

logger = logging.getLogger(__name__)


def toggled(slots, slot_time: str) -> list:
    """Return a new slot list with the flag of ``slot_time`` negated.

    Slots with any other label are copied unchanged.
    """
    return [
        {**slot, "available": not slot["available"]} if slot["time"] == slot_time else dict(slot)
        for slot in slots or []
    ]


class AvailabilityService:
    def __init__(self, db: Session, feed: ChangeFeed):
        self.db = db
        self.feed = feed

    def toggle_slot(self, station_id: str, slot_time: str) -> str:
        """Flip one slot's availability flag and return a confirmation message.

        Last writer wins: there is no version check between the read and the write.
        """
        if not station_id or not slot_time:
            raise ValidationFailedError("Invalid station or slot.")

        try:
            station = self.db.query(Station).filter(Station.id == station_id).first()
            if station is None:
                raise StationNotFoundError()

            updated_slots = toggled(station.slots, slot_time)
            # UPDATE stations SET slots=... only, coordinates are never rewritten here
            matched = self.db.query(Station).filter(Station.id == station_id).update(
                {Station.slots: updated_slots}, synchronize_session=False
            )
            if not matched:
                # deleted between the read and the write
                self.db.rollback()
                raise StationNotFoundError()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error toggling slot {slot_time} on station {station_id}: {e}")
            raise SlotUpdateError()

        self.db.refresh(station)
        logger.info(f"Slot {slot_time} on station {station_id} toggled")
        self.feed.publish(StationChange(station_id, MODIFIED, serialize_station(station).model_dump(mode="json")))
        return f"Slot {slot_time} has been updated."
