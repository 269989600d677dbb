import pytest

from catalog_admin.core.errors import (
    ApiFailure,
    CancelledFailure,
    TransportFailure,
    ValidationFailure,
    failure_from_response,
    to_user_message,
)
from fakes import FakeResponse


def test_field_validation_returns_first_message():
    err = ValidationFailure(
        "HTTP 400", status_code=400, body={"errors": {"field": ["msg1", "msg2"]}}
    )
    assert to_user_message(err) == "msg1"


def test_field_validation_skips_empty_lists_in_key_order():
    body = {
        "title": "One or more validation errors occurred.",
        "errors": {"Title": [], "Number": ["Number must be positive"], "Z": ["later"]},
    }
    err = ValidationFailure("HTTP 400", status_code=400, body=body)
    assert to_user_message(err) == "Number must be positive"


def test_field_validation_without_messages_falls_back_to_title_then_status():
    with_title = ValidationFailure(
        "HTTP 400", status_code=400, body={"title": "Bad input", "errors": {}}
    )
    assert to_user_message(with_title) == "Bad input"

    without_title = ValidationFailure("HTTP 422", status_code=422, body={"errors": {}})
    assert to_user_message(without_title) == "HTTP error 422"


def test_problem_description_title_and_detail():
    err = ValidationFailure("HTTP 409", status_code=409, body={"title": "T", "detail": "D"})
    assert to_user_message(err) == "T: D"


def test_problem_description_title_only():
    err = ValidationFailure("HTTP 409", status_code=409, body={"title": "T"})
    assert to_user_message(err) == "T"


def test_problem_description_detail_only_falls_through_to_status():
    err = ValidationFailure("HTTP 409", status_code=409, body={"detail": "D"})
    assert to_user_message(err) == "HTTP error 409"


def test_malformed_errors_mapping_is_not_field_validation():
    # errors values are not lists of strings, so only the problem shape applies
    err = ValidationFailure(
        "HTTP 400",
        status_code=400,
        body={"title": "T", "detail": "D", "errors": {"field": "not a list"}},
    )
    assert to_user_message(err) == "T: D"


def test_plain_string_body_is_returned_verbatim():
    err = ValidationFailure("HTTP 404", status_code=404, body="oops")
    assert to_user_message(err) == "oops"


def test_blank_string_body_falls_back_to_status():
    err = ValidationFailure("HTTP 404", status_code=404, body="   ")
    assert to_user_message(err) == "HTTP error 404"


def test_status_without_body():
    err = TransportFailure("HTTP 500", status_code=500)
    assert to_user_message(err) == "HTTP error 500"


def test_transport_message_then_network_error():
    assert to_user_message(TransportFailure("Connection refused")) == "Connection refused"
    assert to_user_message(TransportFailure()) == "Network error"


@pytest.mark.parametrize(
    "err",
    [
        ValueError("boom"),
        KeyError("url"),
        None,
        "a string",
        object(),
    ],
)
def test_non_transport_errors_get_generic_message(err):
    assert to_user_message(err) == "Unknown error"


@pytest.mark.parametrize(
    "body",
    [None, 42, [], ["a", "b"], {"title": 5}, {"errors": None}, {"errors": []}, ""],
)
def test_odd_bodies_never_raise(body):
    message = to_user_message(ApiFailure("HTTP 400", status_code=400, body=body))
    assert isinstance(message, str) and message


def test_failure_from_response_maps_status_classes():
    rejected = failure_from_response(FakeResponse(422, {"errors": {"Title": ["Required"]}}))
    assert isinstance(rejected, ValidationFailure)
    assert rejected.status_code == 422
    assert rejected.body == {"errors": {"Title": ["Required"]}}

    crashed = failure_from_response(FakeResponse(503, text="Service Unavailable"))
    assert isinstance(crashed, TransportFailure)
    assert crashed.body == "Service Unavailable"

    empty = failure_from_response(FakeResponse(500))
    assert empty.body is None


def test_cancelled_failure_is_an_api_failure():
    err = CancelledFailure()
    assert isinstance(err, ApiFailure)
    assert err.status_code is None
