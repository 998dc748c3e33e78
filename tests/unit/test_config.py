"""
Unit tests for environment-driven configuration.
"""

import importlib

import pytest

from histogram_routing import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under patched env vars, then restore the defaults."""
    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload

    for key in ("HISTOGRAM_DOMINATOR_POLICY", "HISTOGRAM_MAX_POLYGONS"):
        monkeypatch.delenv(key, raising=False)
    importlib.reload(config)


class TestDominatorPolicySetting:
    """HISTOGRAM_DOMINATOR_POLICY is checked once, at import."""

    def test_valid_value_is_normalized(self, reload_config):
        reloaded = reload_config(HISTOGRAM_DOMINATOR_POLICY="MIDPOINT")
        assert reloaded.DEFAULT_DOMINATOR_POLICY == "midpoint"

    def test_unknown_value_fails_at_import(self, reload_config):
        with pytest.raises(ValueError, match="HISTOGRAM_DOMINATOR_POLICY"):
            reload_config(HISTOGRAM_DOMINATOR_POLICY="closest")

    def test_every_allowed_value_resolves(self):
        from histogram_routing.routing import resolve_policy

        for name in config.DOMINATOR_POLICIES:
            assert resolve_policy(name).value == name


class TestStoreCap:

    def test_max_polygons_from_env(self, reload_config):
        assert reload_config(HISTOGRAM_MAX_POLYGONS="12").MAX_POLYGONS == 12
