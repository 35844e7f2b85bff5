"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from homestead.config import (
    AuthSettings,
    EmailSettings,
    InvitationSettings,
    RealtimeSettings,
    Settings,
)
from homestead.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Provide email settings."""
        return settings.email

    @provide(scope=Scope.APP)
    def provide_realtime_settings(self, settings: Settings) -> RealtimeSettings:
        """Provide realtime settings."""
        return settings.realtime
