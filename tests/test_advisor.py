import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeModel, make_settings
from evrecharge.errors import AdvisorError
from evrecharge.main import create_app
from evrecharge.schemas import SuggestionRequest
from evrecharge.services.advisor import SchedulingAdvisor, build_prompt, parse_model_reply

VALID = {
    "user_schedule": "Meeting from 9 to 10:30 AM, lunch at 1 PM, free afterwards",
    "available_slots": "09:00 AM, 11:00 AM, 02:00 PM",
    "charging_duration": "2 hours",
}


def test_suggestion_success(client, fake_model):
    response = client.post("/advisor/suggestions", json=VALID)
    assert response.status_code == 200
    assert response.json() == {
        "message": "success",
        "data": {
            "suggestedChargingTimes": "11:00 AM",
            "reasoning": "11:00 AM sits between your morning meeting and lunch.",
        },
    }


def test_request_embeds_inputs_verbatim_with_schema(client, fake_model):
    client.post("/advisor/suggestions", json=VALID)

    assert len(fake_model.requests) == 1
    request = fake_model.requests[0]
    assert request.url.path.endswith("/models/gemini-2.0-flash:generateContent")
    assert request.url.params["key"] == "test-genai-key"

    body = json.loads(request.content)
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert set(body["generationConfig"]["responseSchema"]["required"]) == {"suggestedChargingTimes", "reasoning"}
    prompt = fake_model.last_prompt
    for value in VALID.values():
        assert value in prompt
    assert "If no available slot can fit" in prompt


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("user_schedule", "busy", "Please describe your schedule in a bit more detail."),
        ("charging_duration", "2h", "Please enter a valid charging duration (e.g., '2 hours')."),
    ],
)
def test_validation_errors_are_reported_per_field(client, fake_model, field, value, message):
    response = client.post("/advisor/suggestions", json={**VALID, field: value})

    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Validation failed. Please check your inputs."
    assert body["errors"] == {field: [message]}
    assert fake_model.requests == []


def test_missing_fields_fail_validation(client, fake_model):
    response = client.post("/advisor/suggestions", json={"available_slots": "09:00 AM"})
    assert response.status_code == 422
    assert set(response.json()["errors"]) == {"user_schedule", "charging_duration"}
    assert fake_model.requests == []


def test_reply_failing_schema_is_a_generic_error(client, fake_model):
    fake_model.set_reply_text(json.dumps({"suggestedChargingTimes": "11:00 AM"}))

    response = client.post("/advisor/suggestions", json=VALID)
    assert response.status_code == 502
    assert response.json() == {"message": "An error occurred while getting suggestions from the AI."}


def test_non_json_reply_is_a_generic_error(client, fake_model):
    fake_model.set_reply_text("Try 11 AM!")
    assert client.post("/advisor/suggestions", json=VALID).status_code == 502


def test_model_http_error_is_a_generic_error(client, fake_model):
    fake_model.status_code = 429
    response = client.post("/advisor/suggestions", json=VALID)
    assert response.status_code == 502
    assert "quota" not in response.text


def test_transport_error_is_a_generic_error(client, fake_model):
    fake_model.error = httpx.ConnectError("connection refused")
    response = client.post("/advisor/suggestions", json=VALID)
    assert response.status_code == 502
    assert len(fake_model.requests) == 1


def test_missing_api_key_is_a_generic_error():
    model = FakeModel()
    app = create_app(make_settings(GOOGLE_GENAI_API_KEY=None), advisor_transport=httpx.MockTransport(model))
    with TestClient(app) as client:
        response = client.post("/advisor/suggestions", json=VALID)
    assert response.status_code == 502
    assert model.requests == []


def test_no_slot_long_enough_is_stated():
    model = FakeModel()
    model.set_reply_text(json.dumps({
        "suggestedChargingTimes": "No suitable slot available",
        "reasoning": "No 5-hour slot is available: only 09:00 AM and 10:00 AM are open.",
    }))
    advisor = SchedulingAdvisor(make_settings(), transport=httpx.MockTransport(model))
    request = SuggestionRequest(
        user_schedule="free all day",
        available_slots="09:00 AM, 10:00 AM",
        charging_duration="5 hours",
    )

    result = asyncio.run(advisor.suggest(request))

    assert "no 5-hour slot" in result.reasoning.lower()
    assert "Driver's Schedule: free all day" in model.last_prompt
    assert "Available Charging Slots: 09:00 AM, 10:00 AM" in model.last_prompt
    assert "Required Charging Duration: 5 hours" in model.last_prompt


def test_build_prompt_is_fixed_template():
    request = SuggestionRequest(**VALID)
    assert build_prompt(request) == build_prompt(SuggestionRequest(**VALID))
    assert build_prompt(request).startswith("You are an intelligent assistant")


def test_parse_model_reply_rejects_empty_candidates():
    with pytest.raises(AdvisorError):
        parse_model_reply({"candidates": []})
    with pytest.raises(AdvisorError):
        parse_model_reply({})
