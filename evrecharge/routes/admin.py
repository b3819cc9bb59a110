# evrecharge/routes/admin.py
import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, WebSocket, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from evrecharge import auth, models, schemas
from evrecharge.database import get_db
from evrecharge.dependencies import get_availability_service, get_station_service
from evrecharge.errors import (
    SeedingRefusedError,
    SlotUpdateError,
    StationNotFoundError,
    StationWriteError,
    ValidationFailedError,
)
from evrecharge.services.availability import AvailabilityService
from evrecharge.services.change_feed import REMOVED
from evrecharge.services.stations import StationService, serialize_station, sort_slots, station_detail

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"]
)

# Admin Only - List All Stations
@router.get("/stations", response_model=List[schemas.StationResponse], dependencies=[Depends(auth.verify_admin_user)])
def list_stations(service: StationService = Depends(get_station_service)):
    return [serialize_station(s) for s in service.list_stations()]

# Admin Only - List Registered Users
@router.get("/users", response_model=List[schemas.UserProfile], dependencies=[Depends(auth.verify_admin_user)])
def list_users(db: Session = Depends(get_db)):
    return db.query(models.User).order_by(models.User.created_at.desc()).all()

# Admin Only - Create a Station with generated slots
@router.post(
    "/stations",
    response_model=schemas.StationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(auth.verify_admin_user)],
)
def create_station(station: schemas.StationCreate, service: StationService = Depends(get_station_service)):
    try:
        created = service.create_station(station)
    except StationWriteError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return serialize_station(created)

# Admin Only - Delete a Station (bookings are kept)
@router.delete("/stations/{station_id}", dependencies=[Depends(auth.verify_admin_user)])
def delete_station(station_id: str, service: StationService = Depends(get_station_service)):
    try:
        service.delete_station(station_id)
    except StationNotFoundError:
        raise HTTPException(status_code=404, detail="Station not found")
    except StationWriteError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"message": "Station deleted successfully"}

# Admin Only - Seed the stations collection from the static catalogue
@router.post("/seed", response_model=schemas.SeedResult, dependencies=[Depends(auth.verify_admin_user)])
def seed_stations(service: StationService = Depends(get_station_service)):
    try:
        created = service.seed_stations()
    except SeedingRefusedError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except StationWriteError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"message": "Station data has been seeded.", "created": created}

# Admin Only - Toggle one slot's availability
@router.post(
    "/stations/{station_id}/slots/toggle",
    response_model=schemas.ActionResult,
    dependencies=[Depends(auth.verify_admin_user)],
)
def toggle_slot(
    station_id: str,
    payload: schemas.SlotToggleRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        message = service.toggle_slot(station_id, payload.time)
    except ValidationFailedError as e:
        return JSONResponse(status_code=400, content={"success": False, "message": e.message})
    except StationNotFoundError as e:
        return JSONResponse(status_code=404, content={"success": False, "message": e.message})
    except SlotUpdateError as e:
        return JSONResponse(status_code=500, content={"success": False, "message": e.message})
    return {"success": True, "message": message}


# Admin Only - Live view of one station, pushed on every change
def _load_live_view(app, token: str, station_id: str):
    db = app.state.database.SessionLocal()
    try:
        user = auth.user_from_token(token, db, app.state.settings)
        if user is None or not user.is_admin:
            return False, None
        station = db.query(models.Station).filter(models.Station.id == station_id).first()
        return True, station_detail(station).model_dump(mode="json") if station else None
    finally:
        db.close()


async def _wait_for_disconnect(websocket: WebSocket):
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/stations/{station_id}/live")
async def station_live(websocket: WebSocket, station_id: str, token: str = ""):
    allowed, snapshot = await run_in_threadpool(_load_live_view, websocket.app, token, station_id)
    if not allowed:
        logger.warning(f"Rejected live view of station {station_id}: not an admin")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    if snapshot is None:
        await websocket.send_json({"type": "not_found", "station_id": station_id})
        await websocket.close()
        return

    changes: asyncio.Queue = asyncio.Queue()
    disconnect = asyncio.ensure_future(_wait_for_disconnect(websocket))
    try:
        with websocket.app.state.change_feed.subscribe(station_id, changes.put_nowait):
            await websocket.send_json({"type": "snapshot", "station": snapshot})
            while True:
                next_change = asyncio.ensure_future(changes.get())
                done, _ = await asyncio.wait({next_change, disconnect}, return_when=asyncio.FIRST_COMPLETED)
                if next_change not in done:
                    next_change.cancel()
                    break

                change = next_change.result()
                if change.kind == REMOVED:
                    await websocket.send_json({"type": "not_found", "station_id": station_id})
                    await websocket.close()
                    break
                station = dict(change.station)
                station["slots"] = sort_slots(station.get("slots") or [])
                await websocket.send_json({"type": change.kind, "station": station})
    finally:
        disconnect.cancel()
