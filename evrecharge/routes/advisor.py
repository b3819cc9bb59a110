# evrecharge/routes/advisor.py
import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from evrecharge import schemas
from evrecharge.dependencies import get_advisor
from evrecharge.errors import AdvisorError
from evrecharge.services.advisor import SchedulingAdvisor, field_errors

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/advisor",
    tags=["AI Advisor"]
)

# Public - Suggest a charging slot from the user's schedule
@router.post("/suggestions", response_model=schemas.SuggestionResponse, response_model_exclude_none=True)
async def get_ai_suggestion(
    payload: dict = Body(...),
    advisor: SchedulingAdvisor = Depends(get_advisor),
):
    try:
        request = schemas.SuggestionRequest.model_validate(payload)
    except ValidationError as e:
        return JSONResponse(
            status_code=422,
            content={"message": "Validation failed. Please check your inputs.", "errors": field_errors(e)},
        )

    try:
        result = await advisor.suggest(request)
    except AdvisorError as e:
        logger.error(f"AI suggestion failed: {e.message}")
        return JSONResponse(status_code=502, content={"message": AdvisorError.message})

    return {"message": "success", "data": result}
