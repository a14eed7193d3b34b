import pytest

from pwsreport.errors import (
    AuthError,
    AuthenticationError,
    ClientError,
    ConfigError,
    DecodeError,
    EmptyObservationError,
    FetchTimeoutError,
    IdentityFileError,
    NetworkError,
    NotFoundError,
    PwsReportError,
    RateLimitError,
    ServerError,
    StartupError,
    WeatherAPIError,
)


def test_weather_api_error_str_and_flags() -> None:
    err = WeatherAPIError(code=404, message="Not Found")
    assert str(err) == "[404] Not Found"
    assert err.message == "Not Found"
    assert err.is_client_error is True


@pytest.mark.parametrize(
    "code, expected_type",
    [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (400, ClientError),
        (500, ServerError),
        (999, ServerError),
        (0, WeatherAPIError),
    ],
)
def test_from_response_creates_expected_error(
    code: int, expected_type: type[WeatherAPIError]
) -> None:
    resp = {"message": "test error"}
    err = WeatherAPIError.from_response(resp, code)
    assert type(err) is expected_type
    assert err.code == code
    assert "test error" in str(err)


def test_network_error_wraps_exception() -> None:
    try:
        raise ConnectionError("BOOM")
    except ConnectionError as e:
        err = NetworkError(message="Connection error", original_error=e)
        assert str(err) == "[0] Connection error"
        assert isinstance(err.original_error, ConnectionError)


def test_timeout_is_a_network_error() -> None:
    err = FetchTimeoutError("too slow")
    assert isinstance(err, NetworkError)
    assert isinstance(err, WeatherAPIError)


def test_decode_error_wraps_exception() -> None:
    try:
        raise ValueError("bad parse")
    except ValueError as e:
        err = DecodeError(message="Parse error", original_error=e)
        assert str(err) == "[0] Parse error"
        assert isinstance(err.original_error, ValueError)


def test_empty_observation_error_names_station() -> None:
    err = EmptyObservationError("KDEN1")
    assert "KDEN1" in str(err)
    assert err.code == 0


@pytest.mark.parametrize("cls", [ConfigError, IdentityFileError, AuthError])
def test_startup_errors_share_a_base(cls: type[StartupError]) -> None:
    err = cls("failed")
    assert isinstance(err, StartupError)
    assert isinstance(err, PwsReportError)
    assert not isinstance(err, WeatherAPIError)
    assert str(err) == "failed"
