"""Tests for SessionRegistry and FilterValue parsing."""

import pytest

from matchroom.core.errors import InvalidFilterValue
from matchroom.state.sessions import FilterValue, SessionRegistry


class TestFilterValue:
    def test_parse_known_values(self):
        assert FilterValue.parse("male") is FilterValue.MALE
        assert FilterValue.parse(" Female ") is FilterValue.FEMALE
        assert FilterValue.parse(FilterValue.OTHER) is FilterValue.OTHER

    @pytest.mark.parametrize("value", ["robot", "", None, 3, {"gender": "male"}])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(InvalidFilterValue):
            FilterValue.parse(value)


class TestRegister:
    def test_register_creates_session_without_room(self):
        registry = SessionRegistry()
        session = registry.register("c1", "male")

        assert session.id == "c1"
        assert session.filter_value is FilterValue.MALE
        assert session.current_room_id is None
        assert registry.lookup("c1") is session

    @pytest.mark.parametrize("value", [None, "robot", 42])
    def test_register_defaults_to_any(self, value):
        """Missing or unrecognised filter values never fail"""
        registry = SessionRegistry()
        assert registry.register("c1", value).filter_value is FilterValue.ANY

    def test_lookup_missing_returns_none(self):
        assert SessionRegistry().lookup("nobody") is None


class TestFemaleCounter:
    def test_counts_registered_female_sessions(self):
        registry = SessionRegistry()
        registry.register("a", "female")
        registry.register("b", "female")
        registry.register("c", "male")

        assert registry.female_count == 2

        registry.deregister("a")
        registry.deregister("c")
        assert registry.female_count == 1

    def test_deregister_unknown_is_noop(self):
        registry = SessionRegistry()
        registry.register("a", "female")
        registry.deregister("ghost")
        registry.deregister("ghost")

        assert registry.female_count == 1
        assert len(registry) == 1

    def test_double_deregister_never_goes_negative(self):
        registry = SessionRegistry()
        registry.register("a", "female")
        registry.deregister("a")
        registry.deregister("a")

        assert registry.female_count == 0

    def test_reregister_replaces_previous_session(self):
        registry = SessionRegistry()
        registry.register("a", "female")
        registry.register("a", "female")
        assert registry.female_count == 1

        registry.register("a", "male")
        assert registry.female_count == 0
        assert len(registry) == 1
