"""
Application-wide configuration constants and environment-backed settings.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("map", "Map View"),
    TabConfig("dashboard", "Dashboard"),
    TabConfig("upload", "Data Upload"),
    TabConfig("results", "Results"),
]

DEFAULT_SAMPLE_SIZE = 100
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    data_file: Optional[str] = None
    sample_size: int = DEFAULT_SAMPLE_SIZE
    sample_seed: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists outside Streamlit Cloud
        pass
    return default


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = _get_secret(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def load_settings() -> Settings:
    sample_size = _get_int("GEOH2_SAMPLE_SIZE", DEFAULT_SAMPLE_SIZE)
    return Settings(
        data_file=_get_secret("GEOH2_DATA_FILE") or None,
        sample_size=max(sample_size or DEFAULT_SAMPLE_SIZE, 1),
        sample_seed=_get_int("GEOH2_SAMPLE_SEED", None),
        log_level=(_get_secret("GEOH2_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )
