"""Tests for server profile parameter resolution."""

import itertools

import pytest

from src.crconfig.database.postgres_store import MemoryStore
from src.crconfig.errors import ParameterConflictError
from src.crconfig.models.rows import ProfileParameterRow
from src.crconfig.synth.parameters import (
    get_ds_params,
    get_server_profile_params,
    resolve_ds_params,
)


class TestGetServerProfileParams:
    """Test grouping of parameter rows by profile."""

    def test_groups_by_profile(self):
        """Rows are grouped into {profile: {name: value}}."""
        store = MemoryStore()
        store.add_profile_parameter("cdn1", ProfileParameterRow("EDGE", "tld.ttls.NS", "60"))
        store.add_profile_parameter("cdn1", ProfileParameterRow("EDGE", "tld.ttls.SOA", "120"))
        store.add_profile_parameter("cdn1", ProfileParameterRow("MID", "tld.ttls.NS", "60"))

        params = get_server_profile_params("cdn1", store)

        assert params == {
            "EDGE": {"tld.ttls.NS": "60", "tld.ttls.SOA": "120"},
            "MID": {"tld.ttls.NS": "60"},
        }

    def test_other_cdn_not_included(self):
        """Only the requested CDN's parameters are returned."""
        store = MemoryStore()
        store.add_profile_parameter("cdn2", ProfileParameterRow("EDGE", "tld.ttls.NS", "60"))

        assert get_server_profile_params("cdn1", store) == {}


class TestGetDSParams:
    """Test flattening of profile parameters."""

    def test_single_profile(self):
        """Allow-listed parameters are adopted."""
        params = get_ds_params({"EDGE": {"tld.soa.admin": "admin", "tld.ttls.SOA": "100"}})
        assert params == {"tld.soa.admin": "admin", "tld.ttls.SOA": "100"}

    def test_unlisted_parameters_ignored(self):
        """Parameters outside the allow-list never appear, even if they conflict."""
        params = get_ds_params({
            "EDGE": {"health.polling.url": "a", "LogRequestHeaders": "1"},
            "MID": {"health.polling.url": "b"},
        })
        assert params == {"LogRequestHeaders": "1"}

    def test_equal_values_across_profiles(self):
        """Profiles agreeing on a value do not conflict."""
        params = get_ds_params({
            "EDGE": {"tld.ttls.NS": "60"},
            "MID": {"tld.ttls.NS": "60"},
        })
        assert params == {"tld.ttls.NS": "60"}

    def test_absent_parameter_left_out(self):
        """A parameter no profile defines stays absent."""
        params = get_ds_params({"EDGE": {}})
        assert params == {}

    def test_conflict_raises(self):
        """Two profiles with different values fail with both names and values."""
        with pytest.raises(ParameterConflictError) as exc_info:
            get_ds_params({
                "EDGE": {"tld.soa.admin": "a"},
                "MID": {"tld.soa.admin": "b"},
            })

        err = exc_info.value
        assert err.parameter == "tld.soa.admin"
        assert {err.profile, err.other_profile} == {"EDGE", "MID"}
        assert {err.value, err.other_value} == {"a", "b"}
        message = str(err)
        for part in ("EDGE", "MID", "'a'", "'b'"):
            assert part in message

    def test_order_independent_result(self):
        """Permuting profile order never changes the result."""
        server_params = {
            "A": {"tld.ttls.NS": "60", "tld.soa.retry": "10"},
            "B": {"tld.ttls.NS": "60"},
            "C": {"tld.soa.admin": "ops", "tld.soa.retry": "10"},
        }
        expected = get_ds_params(server_params)
        for order in itertools.permutations(server_params):
            permuted = {name: server_params[name] for name in order}
            assert get_ds_params(permuted) == expected

    def test_order_independent_conflict(self):
        """Permuting profile order always detects the same conflict."""
        server_params = {
            "A": {"tld.ttls.NS": "60"},
            "B": {"tld.ttls.NS": "60"},
            "C": {"tld.ttls.NS": "90"},
        }
        reported = set()
        for order in itertools.permutations(server_params):
            permuted = {name: server_params[name] for name in order}
            with pytest.raises(ParameterConflictError) as exc_info:
                get_ds_params(permuted)
            reported.add(str(exc_info.value))
        assert len(reported) == 1


class TestResolveDSParams:
    """Test fetch-and-resolve against a store."""

    def test_resolves_from_store(self):
        store = MemoryStore()
        store.add_profile_parameter("cdn1", ProfileParameterRow("EDGE", "tld.ttls.SOA", "12345"))
        store.add_profile_parameter("cdn1", ProfileParameterRow("EDGE", "other", "x"))

        assert resolve_ds_params("cdn1", store) == {"tld.ttls.SOA": "12345"}
