import pytest

from ccobalt.errors import CobaltError, ErrorContext, describe_error


def test_error_display():
    error = CobaltError("error.api.unreachable")
    assert str(error) == "API unreachable (try again later)"


def test_error_unknown():
    error = CobaltError("error.api.unknown")
    assert str(error) == "error.api.unknown"


def test_describe_error_ignores_case():
    assert describe_error("ERROR.API.TIMED_OUT") == "API timeout (try again later)"


def test_describe_error_known_code():
    assert describe_error("error.api.content.video.live") == "Live videos are unsupported."


def test_error_can_be_raised_and_caught():
    error = CobaltError.from_dict({"code": "error.api.capacity"})
    assert error.code == "error.api.capacity"
    assert error.context is None
    assert str(error) == "API busy (try again later)"
    with pytest.raises(CobaltError, match=r"API busy \(try again later\)") as info:
        raise error
    assert info.value.code == "error.api.capacity"


def test_from_dict_with_context():
    error = CobaltError.from_dict(
        {"code": "error.api.content.too_long", "context": {"service": "youtube", "limit": 5}}
    )
    assert error.code == "error.api.content.too_long"
    assert error.context == ErrorContext(service="youtube", limit=5)
    assert str(error) == "The requested content is too big."


def test_from_dict_without_context():
    error = CobaltError.from_dict({"code": "error.api.generic", "context": None})
    assert error.context is None


def test_from_dict_missing_code():
    with pytest.raises(ValueError):
        CobaltError.from_dict({"context": {}})


def test_context_rejects_negative_limit():
    with pytest.raises(ValueError):
        ErrorContext.from_dict({"limit": -1})


def test_context_rejects_non_string_service():
    with pytest.raises(ValueError):
        ErrorContext.from_dict({"service": 3})


def test_context_empty_object():
    assert ErrorContext.from_dict({}) == ErrorContext(service=None, limit=None)