# docsite/deps.py
from __future__ import annotations

from fastapi import Depends

from .core.config import Settings, get_settings
from .domain import datasource


def get_ds() -> datasource.DataSource:
    return datasource.get_datasource()

def get_allowed_licenses(settings: Settings = Depends(get_settings)) -> frozenset:
    """License types that make content redistributable."""
    return frozenset(settings.REDISTRIBUTABLE_LICENSES)
