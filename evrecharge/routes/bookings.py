# evrecharge/routes/bookings.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from evrecharge import auth, models, schemas
from evrecharge.dependencies import get_booking_service
from evrecharge.errors import BookingError, StationNotFoundError, ValidationFailedError
from evrecharge.services.bookings import BookingService

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"]
)

# Book a Selected Slot
@router.post("", response_model=schemas.BookingResponse, status_code=status.HTTP_201_CREATED)
def book_selected_slot(
    booking_data: schemas.BookingCreate,
    current_user: models.User = Depends(auth.get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    try:
        return service.create_booking(current_user, booking_data.station_id, booking_data.slot)
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except StationNotFoundError:
        raise HTTPException(status_code=404, detail="Station not found")
    except BookingError as e:
        raise HTTPException(status_code=500, detail=e.message)

# List User Bookings, newest first
@router.get("/my-bookings", response_model=List[schemas.BookingResponse])
def list_user_bookings(
    current_user: models.User = Depends(auth.get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_user_bookings(current_user)
