"""
Unit Tests for configuration (store_density.tools, ClusteringConfig)
"""

import pytest

from store_density.errors import InvalidParameterError
from store_density.pipeline import ClusteringConfig
from store_density.tools import ConfigLoader, get_config


class TestConfigLoader:
    """Test YAML profile loading."""

    def test_available_profiles(self):
        assert ConfigLoader.available_profiles() == ["dense-city", "rural", "suburban"]

    def test_load_suburban(self):
        profile = ConfigLoader.load_profile("suburban")
        assert profile["clustering"]["eps_m"] == 500
        assert profile["clustering"]["min_pts"] == 3

    def test_missing_profile(self):
        with pytest.raises(FileNotFoundError) as excinfo:
            ConfigLoader.load_profile("downtown")
        assert "suburban" in str(excinfo.value)

    def test_default_profile(self):
        assert get_config()["name"] == "suburban"

    def test_env_profile(self, monkeypatch):
        monkeypatch.setenv("STORE_DENSITY_PROFILE", "rural")
        assert ConfigLoader.get_profile_from_env() == "rural"
        assert get_config()["name"] == "rural"


class TestClusteringConfig:
    """Test clustering configuration."""

    def test_default_config(self):
        config = ClusteringConfig()

        assert config.eps_m == 500.0
        assert config.min_pts == 3
        assert config.allow_empty is False
        assert config.h3_res == 9
        assert config.label_top_n == 2

    def test_from_profile(self):
        config = ClusteringConfig.from_profile("dense-city")

        assert config.eps_m == 300
        assert config.min_pts == 5
        assert config.h3_res == 10

    def test_from_profile_env(self, monkeypatch):
        monkeypatch.setenv("STORE_DENSITY_PROFILE", "rural")
        config = ClusteringConfig.from_profile()

        assert config.eps_m == 1500
        assert config.allow_empty is True
        assert config.label_top_n == 3

    def test_from_flat_dict(self):
        config = ClusteringConfig.from_dict({"eps_m": 250, "min_pts": 4})
        assert (config.eps_m, config.min_pts) == (250, 4)

    def test_unknown_keys_rejected(self):
        with pytest.raises(InvalidParameterError):
            ClusteringConfig.from_dict({"clustering": {"epsilon": 250}})

    @pytest.mark.parametrize("kwargs", [
        {"eps_m": 0},
        {"min_pts": 0},
        {"h3_res": 16},
    ])
    def test_validate(self, kwargs):
        with pytest.raises(InvalidParameterError):
            ClusteringConfig(**kwargs).validate()


class TestProfileSettings:
    """Test flattening profiles and environment overrides."""

    def test_flatten_nested_profile(self):
        flat = ConfigLoader.flatten_profile({
            "name": "custom",
            "clustering": {"eps_m": 250, "min_pts": 4},
            "summary": {"h3_res": 8},
        })
        assert flat == {"eps_m": 250, "min_pts": 4, "h3_res": 8}

    def test_flat_mapping_passes_through(self):
        assert ConfigLoader.flatten_profile({"eps_m": 250}) == {"eps_m": 250}

    def test_section_must_be_mapping(self):
        with pytest.raises(InvalidParameterError):
            ConfigLoader.flatten_profile({"clustering": [250, 4]})

    def test_load_settings(self):
        settings = ConfigLoader.load_settings("rural")

        assert settings["eps_m"] == 1500
        assert settings["allow_empty"] is True
        assert "name" not in settings

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STORE_DENSITY_EPS_M", "750")
        monkeypatch.setenv("STORE_DENSITY_MIN_PTS", "6")
        monkeypatch.setenv("STORE_DENSITY_ALLOW_EMPTY", "yes")

        config = ClusteringConfig.from_profile("suburban")

        assert config.eps_m == 750.0
        assert config.min_pts == 6
        assert config.allow_empty is True
        assert config.h3_res == 9

    def test_invalid_env_override(self, monkeypatch):
        monkeypatch.setenv("STORE_DENSITY_MIN_PTS", "three")
        with pytest.raises(InvalidParameterError):
            ConfigLoader.load_settings()

    def test_env_overrides_from_mapping(self):
        assert ConfigLoader.env_overrides({"STORE_DENSITY_ALLOW_EMPTY": "off"}) == {"allow_empty": False}
