from statusboard.core.exceptions import (
    AggregationError,
    IncidentParseError,
    InvalidRequestError,
    StatusPageError,
)


def test_status_error_to_dict():
    err = StatusPageError(code="test_error", message="Something broke", status=500)
    d = err.to_dict()
    assert d["error"]["code"] == "test_error"
    assert d["error"]["message"] == "Something broke"
    assert d["error"]["status"] == 500
    assert "details" not in d["error"]


def test_status_error_with_details():
    err = StatusPageError(code="x", message="y", status=400, details={"hint": "try again"})
    d = err.to_dict()
    assert d["error"]["details"]["hint"] == "try again"


def test_invalid_request_defaults():
    err = InvalidRequestError()
    assert err.status == 400
    assert err.code == "invalid_request"


def test_invalid_request_custom_code():
    err = InvalidRequestError("Bad type.", code="invalid_type")
    assert err.code == "invalid_type"
    assert err.message == "Bad type."


def test_aggregation_error_is_generic():
    err = AggregationError(details={"reason": "no services configured"})
    assert err.status == 500
    assert err.message == "Failed to check services."


def test_incident_parse_error():
    err = IncidentParseError("bad doc")
    assert isinstance(err, StatusPageError)
    assert err.code == "incident_parse_error"
