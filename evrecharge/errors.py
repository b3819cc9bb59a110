# evrecharge/errors.py


class EVRechargeError(Exception):
    """Base class for errors raised by the service layer."""

    message = "Something went wrong"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationFailedError(EVRechargeError):
    message = "Validation failed. Please check your inputs."


class StationNotFoundError(EVRechargeError):
    message = "Station not found."


class SlotUpdateError(EVRechargeError):
    message = "Failed to update the slot. Please try again."


class BookingError(EVRechargeError):
    message = "Could not book the slot. Please try again."


class SeedingRefusedError(EVRechargeError):
    message = (
        "The stations collection is not empty. "
        "Seeding has been cancelled to avoid duplicates."
    )


class AdvisorError(EVRechargeError):
    message = "An error occurred while getting suggestions from the AI."


class StationWriteError(EVRechargeError):
    message = "Could not save the station. Please try again."
