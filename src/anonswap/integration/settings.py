"""Fixed fee settings for a single pair."""

from __future__ import annotations

import logging

from ..core.collaborators import PairSettings, PairSettingsQuery


logger = logging.getLogger(__name__)


class StaticPairSettings(PairSettingsQuery):
    def __init__(self, settings: PairSettings) -> None:
        if not isinstance(settings, PairSettings):
            raise TypeError("settings must be a PairSettings")
        self._settings = settings

    def query_settings(self) -> PairSettings:
        return self._settings

    def update(self, settings: PairSettings) -> None:
        """Replace the commission rate; takes effect from the next call."""
        if not isinstance(settings, PairSettings):
            raise TypeError("settings must be a PairSettings")
        logger.info(
            "commission rate %d/%d -> %d/%d",
            self._settings.commission_rate_nom,
            self._settings.commission_rate_denom,
            settings.commission_rate_nom,
            settings.commission_rate_denom,
        )
        self._settings = settings
