"""Unit tests for NotificationService."""

from datetime import datetime, timezone

import pytest

from homestead.adapter.email import MockEmailSender
from homestead.domain.service import NotificationService
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

EXPIRES_AT = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


class TestSendInviteEmail:
    """Tests for send_invite_email method."""

    @pytest.mark.asyncio
    async def test_sends_code_and_link(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        sender = await unit_env.get(MockEmailSender)

        sent = await notification_service.send_invite_email(
            "friend@example.com", "ABCD2345", EXPIRES_AT, invite_id=1
        )

        assert sent is True
        assert len(sender.sent) == 1
        to, subject, body = sender.sent[0]
        assert to == "friend@example.com"
        assert "invite" in subject.lower()
        assert "ABCD2345" in body
        assert "2026-03-01 12:30" in body
        assert "/invites/ABCD2345" in body

    @pytest.mark.asyncio
    async def test_no_address_sends_nothing(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        sender = await unit_env.get(MockEmailSender)

        sent = await notification_service.send_invite_email(None, "ABCD2345", EXPIRES_AT)

        assert sent is False
        assert sender.sent == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_swallowed(self, unit_env):
        """A failing transport is logged and reported, never raised."""
        notification_service = await unit_env.get(NotificationService)
        sender = await unit_env.get(MockEmailSender)
        sender.fail = True

        sent = await notification_service.send_invite_email(
            "friend@example.com", "ABCD2345", EXPIRES_AT, invite_id=1
        )

        assert sent is False
        assert sender.sent == []
