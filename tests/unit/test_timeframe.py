"""Unit tests for date archive granularity."""

from wp_logic.core.state import RequestState
from wp_logic.core.timeframe import timeframe


def _date_state(**kwargs: object) -> RequestState:
    return RequestState(is_archive=True, is_date=True, **kwargs)


class TestTimeframe:
    def test_unknown_before_query(self) -> None:
        assert timeframe(None) is None

    def test_not_a_date_archive(self) -> None:
        assert timeframe(RequestState(is_archive=True)) is False

    def test_date_units(self) -> None:
        assert timeframe(_date_state(is_day=True)) == "day"
        assert timeframe(_date_state(query_vars={"w": "12"})) == "week"
        assert timeframe(_date_state(is_month=True)) == "month"
        assert timeframe(_date_state(is_year=True)) == "year"

    def test_day_wins_over_month(self) -> None:
        assert timeframe(_date_state(is_day=True, is_month=True, is_year=True)) == "day"

    def test_nameless_date(self) -> None:
        assert timeframe(_date_state()) is True

    def test_only_hour_set(self) -> None:
        state = _date_state(is_time=True, query_vars={"hour": "13"})
        assert timeframe(state) == "hour"

    def test_most_specific_time_unit_first(self) -> None:
        state = _date_state(is_time=True, query_vars={"hour": "13", "minute": "5", "second": ""})
        assert timeframe(state) == "minute"

    def test_zero_counts_as_set(self) -> None:
        state = _date_state(is_time=True, query_vars={"hour": "13", "second": "0"})
        assert timeframe(state) == "second"
        assert timeframe(_date_state(is_time=True, query_vars={"minute": 0})) == "minute"

    def test_time_without_values_is_nameless(self) -> None:
        assert timeframe(_date_state(is_time=True)) is True
