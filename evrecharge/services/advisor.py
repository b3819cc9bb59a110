"""
AI Scheduling Advisor

Stateless wrapper around the Google Generative Language API. The user's
schedule, the station's available slots and the charging duration are
embedded verbatim into a fixed instruction template; the model picks the
slot and explains itself. No scheduling is computed here.
"""

import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from evrecharge.config import Settings
from evrecharge.errors import AdvisorError
from evrecharge.schemas import SuggestionRequest, SuggestionResult

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are an intelligent assistant helping a driver find the best time to charge their electric vehicle.

Look at the driver's schedule, the charging slots that are still available at the station, and how long they need to charge.

Your task:
1. Choose the single slot that best fits the driver's schedule and the required charging duration.
2. If several slots would work, recommend the one that disrupts their day the least.
3. Give short, friendly reasoning: say why the chosen slot works and briefly why the other available slots are less suitable.
4. If no available slot can fit the schedule and the charging duration, say so clearly and explain why (for example, "No 2-hour slots are available that don't conflict with your plans.").

Driver's Schedule: {user_schedule}
Available Charging Slots: {available_slots}
Required Charging Duration: {charging_duration}
"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedChargingTimes": {
            "type": "STRING",
            "description": (
                "The suggested charging time. Pick the best one if several fit. "
                "If no suitable slot exists, say so."
            ),
        },
        "reasoning": {
            "type": "STRING",
            "description": (
                "Why the suggestion fits the schedule and duration, and why the "
                "other times were ruled out."
            ),
        },
    },
    "required": ["suggestedChargingTimes", "reasoning"],
}

# Inline messages for the form fields, keyed by field name
FIELD_MESSAGES = {
    "user_schedule": "Please describe your schedule in a bit more detail.",
    "charging_duration": "Please enter a valid charging duration (e.g., '2 hours').",
    "available_slots": "Available slots must be a comma-separated list.",
}


def build_prompt(request: SuggestionRequest) -> str:
    return PROMPT_TEMPLATE.format(
        user_schedule=request.user_schedule,
        available_slots=request.available_slots,
        charging_duration=request.charging_duration,
    )


def field_errors(exc: ValidationError) -> dict:
    """Collapse pydantic errors into ``{field: [message]}`` for inline display."""
    errors = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "__root__"
        errors.setdefault(field, []).append(FIELD_MESSAGES.get(field, error["msg"]))
    return errors


def parse_model_reply(body: dict) -> SuggestionResult:
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise AdvisorError("Model reply has no content")
    try:
        return SuggestionResult.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        raise AdvisorError(f"Model reply does not match the suggestion schema: {e}")


class SchedulingAdvisor:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.GOOGLE_GENAI_API_KEY
        self.model = settings.GENAI_MODEL
        self.base_url = settings.GENAI_BASE_URL.rstrip("/")
        self.timeout = settings.GENAI_TIMEOUT_SECONDS
        self.transport = transport

    async def suggest(self, request: SuggestionRequest) -> SuggestionResult:
        """Ask the model for a charging slot. Any failure raises ``AdvisorError``."""
        if not self.api_key:
            logger.error("GOOGLE_GENAI_API_KEY is not configured")
            raise AdvisorError("Generative AI API key is not configured")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(request)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        url = f"{self.base_url}/models/{self.model}:generateContent"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Generative AI request failed: {e}")
            raise AdvisorError(str(e))

        logger.info(f"Generative AI response status: {response.status_code}")
        if response.status_code != 200:
            logger.error(f"Generative AI error [{response.status_code}]: {response.text[:500]}")
            raise AdvisorError(f"Model call returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            raise AdvisorError("Model reply is not JSON")
        return parse_model_reply(body)
