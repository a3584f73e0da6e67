"""
Configuration loader for clustering profiles and environment variables.

Profiles are YAML files under ``store_density/configs`` with a ``name``
and two sections:

    clustering:  eps_m, min_pts, allow_empty, compute_silhouette
    summary:     h3_res, label_top_n

``load_settings`` flattens the sections into one mapping of
``ClusteringConfig`` field names and applies ``STORE_DENSITY_*``
environment overrides on top.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import yaml

from ..errors import InvalidParameterError


DEFAULT_PROFILE = "suburban"
PROFILE_ENV_VAR = "STORE_DENSITY_PROFILE"

PROFILE_SECTIONS = ("clustering", "summary")


def _parse_bool(value: str) -> bool:
    text = value.strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ValueError(value)


# Environment variable -> (setting, parser)
ENV_OVERRIDES: Dict[str, tuple] = {
    "STORE_DENSITY_EPS_M": ("eps_m", float),
    "STORE_DENSITY_MIN_PTS": ("min_pts", int),
    "STORE_DENSITY_ALLOW_EMPTY": ("allow_empty", _parse_bool),
}


class ConfigLoader:
    """Load clustering profiles from YAML files and environment."""

    CONFIG_DIR = Path(__file__).parent.parent / "configs"

    @classmethod
    def available_profiles(cls) -> List[str]:
        """Names of the bundled profiles, sorted."""
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a raw clustering profile.

        Raises:
            FileNotFoundError: If profile doesn't exist (message lists the
                bundled profiles)
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. "
                f"Available profiles: {', '.join(cls.available_profiles())}"
            )

        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def flatten_profile(data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Merge profile sections into one flat mapping.

        Top-level keys other than ``name`` and the sections are kept as they
        are, so an already flat mapping passes through unchanged. Later
        sections win on duplicate keys.
        """
        flat: Dict[str, Any] = {}
        for section in PROFILE_SECTIONS:
            values = data.get(section) or {}
            if not isinstance(values, Mapping):
                raise InvalidParameterError(f"Profile section '{section}' must be a mapping")
            flat.update(values)
        flat.update({k: v for k, v in data.items() if k not in PROFILE_SECTIONS and k != "name"})
        return flat

    @classmethod
    def env_overrides(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Settings taken from ``STORE_DENSITY_*`` environment variables.

        Raises:
            InvalidParameterError: If a variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for var, (setting, parse) in ENV_OVERRIDES.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                overrides[setting] = parse(raw)
            except ValueError:
                raise InvalidParameterError(f"{var}={raw!r} is not a valid {setting}") from None
        return overrides

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from the STORE_DENSITY_PROFILE environment variable."""
        return os.getenv(PROFILE_ENV_VAR)

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """Load the profile named in the environment, or the suburban default."""
        profile = cls.get_profile_from_env() or DEFAULT_PROFILE
        return cls.load_profile(profile)

    @classmethod
    def load_settings(cls, profile_name: Optional[str] = None) -> Dict[str, Any]:
        """
        Flat clustering settings for a profile, with environment overrides.

        Args:
            profile_name: Profile to load (environment/default when None)
        """
        if profile_name is None:
            data = cls.load_default_or_env_profile()
        else:
            data = cls.load_profile(profile_name)

        settings = cls.flatten_profile(data)
        settings.update(cls.env_overrides())
        return settings


def get_config() -> Dict[str, Any]:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()
