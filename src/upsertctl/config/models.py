"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, upsertctl.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    url: str = "sqlite:///upsertctl.db"
    echo: bool = False
