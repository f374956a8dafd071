from datetime import date

import pytest

from onboard.utils.filter_params import ALL, FilterSession, FilterState, OnboardingStatus

BOUNDS = (date(2022, 12, 31), date(2023, 3, 15))


def ids(df):
    return df["user_id"].tolist()


def test_defaults_leave_categoricals_unset():
    state = FilterState.defaults(BOUNDS)
    assert state.country is None
    assert state.subscription_type is None
    assert state.onboarding_status is None
    assert state.channel is None
    assert state.date_range == BOUNDS
    assert state.is_default(BOUNDS)


def test_with_value_changes_one_dimension_only():
    state = FilterState.defaults(BOUNDS)
    changed = state.with_value("country", "France")

    assert changed.country == "France"
    assert changed.date_range == BOUNDS
    assert state.country is None  # original untouched
    assert not changed.is_default(BOUNDS)


def test_all_token_means_unset():
    state = FilterState.defaults(BOUNDS).with_value("channel", "Google")
    assert state.with_value("channel", ALL).channel is None
    assert state.with_value("onboarding_status", ALL).onboarding_status is None


def test_empty_string_is_a_value_not_unset():
    state = FilterState.defaults(BOUNDS).with_value("country", "")
    assert state.country == ""


def test_onboarding_status_is_parsed_into_enum():
    state = FilterState.defaults(BOUNDS).with_value("onboarding_status", "not-onboarded")
    assert state.onboarding_status is OnboardingStatus.NOT_ONBOARDED

    with pytest.raises(ValueError):
        state.with_value("onboarding_status", "maybe")


def test_unknown_dimension_is_rejected():
    with pytest.raises(KeyError):
        FilterState.defaults(BOUNDS).with_value("planet", "Mars")


def test_default_state_drops_only_null_registration_dates(base):
    subset = FilterState.defaults(BOUNDS).apply(base)
    assert ids(subset) == ["u1", "u2", "u3", "u6", "u7"]
    assert set(ids(base)) - set(ids(subset)) == {"u4", "u5"}


def test_null_dates_fail_even_without_bounds(base):
    subset = FilterState().apply(base)
    assert "u4" not in ids(subset)
    assert "u5" not in ids(subset)


def test_date_range_is_inclusive(base):
    state = FilterState.defaults(BOUNDS).with_value("date_range", (date(2023, 1, 5), date(2023, 2, 10)))
    assert ids(state.apply(base)) == ["u1", "u2", "u3"]


def test_inverted_date_range_is_empty_not_error(base):
    state = FilterState.defaults(BOUNDS).with_value("date_range", (BOUNDS[1], BOUNDS[0]))
    assert state.apply(base).empty


def test_unknown_category_gives_empty_subset(base):
    state = FilterState.defaults(BOUNDS).with_value("country", "Atlantis")
    assert state.apply(base).empty


def test_sentinel_filter_value_matches_nothing(base):
    for value in ("", "NULL"):
        state = FilterState.defaults(BOUNDS).with_value("channel", value)
        assert state.apply(base).empty


def test_equality_filters(base):
    defaults = FilterState.defaults(BOUNDS)
    assert ids(defaults.with_value("country", "United States of America").apply(base)) == ["u1", "u2"]
    assert ids(defaults.with_value("subscription_type", "monthly").apply(base)) == ["u1", "u3", "u7"]
    assert ids(defaults.with_value("channel", "Google").apply(base)) == ["u1", "u3"]
    assert ids(defaults.with_value("onboarding_status", "onboarded").apply(base)) == ["u1", "u3", "u6"]


def test_onboarding_status_excludes_missing_status(base):
    state = FilterState.defaults(BOUNDS).with_value("onboarding_status", "not-onboarded")
    assert ids(state.apply(base)) == ["u2"]


def test_filters_compose_as_intersection(base):
    defaults = FilterState.defaults(BOUNDS)
    by_country = defaults.with_value("country", "France")
    by_sub = defaults.with_value("subscription_type", "monthly")
    both = by_country.with_value("subscription_type", "monthly")

    chained = by_sub.apply(by_country.apply(base))
    assert ids(both.apply(base)) == ids(chained) == ["u3", "u7"]

    independent = set(ids(by_country.apply(base))) & set(ids(by_sub.apply(base)))
    assert set(ids(both.apply(base))) == independent


@pytest.mark.parametrize(
    "dimension, value",
    [
        ("country", "France"),
        ("subscription_type", "annual"),
        ("onboarding_status", "onboarded"),
        ("channel", "Friend"),
        ("date_range", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_subset_is_always_part_of_base(base, dimension, value):
    subset = FilterState.defaults(BOUNDS).with_value(dimension, value).apply(base)
    assert len(subset) <= len(base)
    assert set(subset.index) <= set(base.index)
    assert subset.index.is_monotonic_increasing


def test_session_update_and_atomic_reset():
    defaults = FilterState.defaults(BOUNDS)
    session = FilterSession(defaults)

    session.update("country", "France")
    session.update("onboarding_status", "onboarded")
    session.update("date_range", (date(2023, 2, 1), date(2023, 2, 28)))
    assert session.state.country == "France"

    before = session.state
    assert session.reset() == defaults
    assert session.state is defaults
    assert before.country == "France"  # previous snapshot never partially reset


def test_to_dict_uses_iso_dates_and_enum_values():
    state = FilterState.defaults(BOUNDS).with_value("onboarding_status", "onboarded")
    assert state.to_dict() == {
        "country": None,
        "subscription_type": None,
        "onboarding_status": "onboarded",
        "channel": None,
        "start_date": "2022-12-31",
        "end_date": "2023-03-15",
    }
