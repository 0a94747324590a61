from datetime import datetime

from hrleave.core.schemas import ApiResponse


def test_api_response_serializes_timestamp_as_iso():
    payload = ApiResponse.ok({"remaining_balance": 18.67}, metadata={"year": 2024}).to_dict()

    assert payload["success"] is True
    assert payload["metadata"] == {"year": 2024}
    assert datetime.fromisoformat(payload["timestamp"]).tzinfo is not None


def test_api_response_has_no_legacy_json_encoders():
    assert "json_encoders" not in ApiResponse.model_config


def test_failed_response_keeps_data_and_error():
    payload = ApiResponse.fail("User ID is required", code="LEAVE_BALANCE_UNAVAILABLE", data={"remaining_balance": 0}).to_dict()

    assert payload["success"] is False
    assert payload["data"] == {"remaining_balance": 0}
    assert payload["error"]["code"] == "LEAVE_BALANCE_UNAVAILABLE"
