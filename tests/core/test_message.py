"""
Tests for parameterized templates and resolution statuses.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from waterinsights.core.domain.enums import DayOfWeek, DeviceType
from waterinsights.core.domain.message import MessageResolutionStatus, RecommendationTemplate
from waterinsights.core.services.resolvers.insight_a1 import InsightA1Parameters

REF_DATE = datetime(2026, 10, 22, 9, 0, tzinfo=ZoneInfo("Europe/Athens"))  # Thursday


def make_parameters(current: float, average: float) -> InsightA1Parameters:
    return InsightA1Parameters(
        ref_date=REF_DATE,
        device_type=DeviceType.AMPHIRO,
        current_value=current,
        average_value=average,
    )


@pytest.mark.parametrize(
    "current, average, expected",
    [
        (15.0, 10.0, 50),
        (14.99, 10.0, 49),  # truncated, not rounded
        (5.01, 10.0, 49),
        (20.0, 10.0, 100),
    ],
)
def test_percent_change_truncates(current, average, expected):
    assert make_parameters(current, average).parameters["percent_change"] == expected


def test_template_selection():
    assert make_parameters(12.0, 10.0).template == RecommendationTemplate.INSIGHT_A1_DAYOFWEEK_CONSUMPTION_INCR
    assert make_parameters(10.0, 10.0).template == RecommendationTemplate.INSIGHT_A1_DAYOFWEEK_CONSUMPTION_INCR
    assert make_parameters(8.0, 10.0).template == RecommendationTemplate.INSIGHT_A1_DAYOFWEEK_CONSUMPTION_DECR


def test_parameter_map():
    parameters = make_parameters(12.5, 10.0).parameters

    assert parameters == {
        "ref_date": REF_DATE,
        "device_type": DeviceType.AMPHIRO,
        "value": 12.5,
        "consumption": 12.5,
        "average_value": 10.0,
        "average_consumption": 10.0,
        "percent_change": 25,
        "day": REF_DATE,
        "day_of_week": DayOfWeek.THURSDAY,
    }


def test_with_locale_is_identity():
    parameters = make_parameters(12.0, 10.0)
    assert parameters.with_locale("el") is parameters
    assert parameters.with_locale("en", currency_rate=object()) is parameters


def test_values_must_be_positive():
    with pytest.raises(ValidationError):
        make_parameters(0.0, 10.0)
    with pytest.raises(ValidationError):
        make_parameters(10.0, 0.0)


def test_parameters_are_immutable():
    parameters = make_parameters(12.0, 10.0)
    with pytest.raises(ValidationError):
        parameters.current_value = 1.0


def test_resolution_status_is_frozen():
    status = MessageResolutionStatus(score=1.5, template=make_parameters(12.0, 10.0))
    with pytest.raises(AttributeError):
        status.score = 2.0
