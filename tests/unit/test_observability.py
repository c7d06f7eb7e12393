from src.api.observability import filter_sensitive_data


def test_filter_masks_passwords_and_tokens():
    event = {
        "request": {
            "data": {"token": "abc", "newPassword": "NewPass123", "userId": "42"},
            "query_string": "token=abc",
            "headers": {"Authorization": "Bearer xyz", "Accept": "application/json"},
        }
    }

    filtered = filter_sensitive_data(event)

    request = filtered["request"]
    assert request["data"] == {
        "token": "[FILTERED]",
        "newPassword": "[FILTERED]",
        "userId": "42",
    }
    assert request["query_string"] == "[FILTERED]"
    assert request["headers"]["Authorization"] == "[FILTERED]"
    assert request["headers"]["Accept"] == "application/json"


def test_filter_leaves_events_without_request_alone():
    event = {"message": "boom"}

    assert filter_sensitive_data(event) == {"message": "boom"}
