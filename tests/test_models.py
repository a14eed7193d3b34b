"""Tests for observation models and response parsing.

These tests verify that:
1. The sample current-conditions response parses correctly
2. Model validation catches malformed responses
3. Optional fields and ignored attributes are handled properly
4. Observation times are timezone-aware UTC
"""

from datetime import timedelta
from typing import Any

import pytest
from pydantic import ValidationError

from pwsreport.errors import EmptyObservationError
from pwsreport.weather.models import CurrentConditions, Observation


def test_current_conditions_validation(current_payload: dict[str, Any]) -> None:
    """CurrentConditions should parse the sample without errors."""
    conditions = CurrentConditions.model_validate(current_payload)
    obs = conditions.latest()

    assert obs.station_id == "KDEN1"
    assert obs.neighborhood == "Capitol Hill"
    assert obs.imperial.precip_total == 0.12
    assert obs.imperial.elev == 5280
    assert obs.is_quality_checked is True


def test_obs_time_is_utc(observation_payload: dict[str, Any]) -> None:
    obs = Observation.model_validate(observation_payload)
    assert obs.obs_time_utc.utcoffset() == timedelta(0)
    assert obs.obs_time_utc.hour == 17


def test_realtime_frequency_is_ignored(observation_payload: dict[str, Any]) -> None:
    observation_payload["realtimeFrequency"] = {"anything": [1, 2]}
    obs = Observation.model_validate(observation_payload)
    assert not hasattr(obs, "realtime_frequency")


def test_missing_temperature_is_rejected(observation_payload: dict[str, Any]) -> None:
    del observation_payload["imperial"]["temp"]
    with pytest.raises(ValidationError):
        Observation.model_validate(observation_payload)


def test_missing_station_id_is_rejected(observation_payload: dict[str, Any]) -> None:
    del observation_payload["stationID"]
    with pytest.raises(ValidationError):
        Observation.model_validate(observation_payload)


def test_latest_on_empty_response_raises() -> None:
    conditions = CurrentConditions.model_validate({"observations": []})
    with pytest.raises(EmptyObservationError, match="KDEN1"):
        conditions.latest("KDEN1")
