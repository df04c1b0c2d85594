"""User settings services."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutrition_coach.domain.adjustment import (
    DEFAULT_ADJUSTMENT_SETTINGS,
    AdjustmentSettings,
)

_logger = logging.getLogger(__name__)

SettingsListener = Callable[[UUID, AdjustmentSettings], None]


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""

    def get_adjustment_settings(self, user_id: UUID) -> AdjustmentSettings | None:
        """Return the last-used adjustment settings, if stored."""

    def set_adjustment_settings(
        self, user_id: UUID, settings: AdjustmentSettings
    ) -> None:
        """Persist the last-used adjustment settings."""


@dataclass
class UserSettingsService:
    """Service for the user's timezone."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the default if unset."""
        return self.repository.get_timezone(user_id) or self.default_timezone

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        self.repository.set_timezone(user_id, timezone)


@dataclass
class AdjustmentSettingsStore:
    """Last-used adjustment settings with change notifications."""

    repository: UserSettingsRepository
    _listeners: list[SettingsListener] = field(default_factory=list)

    def get(self, user_id: UUID) -> AdjustmentSettings:
        """Return stored settings or home/normal/medium."""
        return (
            self.repository.get_adjustment_settings(user_id)
            or DEFAULT_ADJUSTMENT_SETTINGS
        )

    def set(self, user_id: UUID, settings: AdjustmentSettings) -> AdjustmentSettings:
        """Persist settings and notify listeners."""
        self.repository.set_adjustment_settings(user_id, settings)
        _logger.debug("Adjustment settings updated: user=%s %s", user_id, settings)
        for listener in list(self._listeners):
            listener(user_id, settings)
        return settings

    def on_change(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
