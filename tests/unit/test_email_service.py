"""Unit tests for EmailService."""

from unittest.mock import MagicMock, patch

import pytest

from src.services.email_service import EmailService


@pytest.fixture
def email_service() -> EmailService:
    """Create EmailService with test settings."""
    settings = MagicMock()
    settings.resend_api_key = "re_test_key"
    settings.email_from_address = "Timesheets <noreply@example.com>"
    settings.frontend_url = "https://app.example.com"
    with patch("src.services.email_service.get_settings", return_value=settings):
        return EmailService()


class TestSendInviteEmail:
    """Tests for send_invite_email method."""

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend.Emails.send")
    async def test_sends_invite(self, mock_send: MagicMock, email_service: EmailService) -> None:
        """Test that the invite goes to the new user with a sign-in link."""
        mock_send.return_value = {"id": "email-1"}

        result = await email_service.send_invite_email("a@x.com", "Acme")

        assert result == {"success": True, "email_id": "email-1"}
        params = mock_send.call_args[0][0]
        assert params["to"] == ["a@x.com"]
        assert params["from"] == "Timesheets <noreply@example.com>"
        assert "Acme" in params["subject"]
        assert "https://app.example.com/login" in params["html"]

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend.Emails.send")
    async def test_without_company_name(self, mock_send: MagicMock, email_service: EmailService) -> None:
        """Test the fallback wording when the company name is unknown."""
        mock_send.return_value = {"id": "email-2"}

        await email_service.send_invite_email("a@x.com")

        assert "your team" in mock_send.call_args[0][0]["subject"]

    @pytest.mark.asyncio
    @patch("src.services.email_service.resend.Emails.send")
    async def test_failure_is_reported_not_raised(self, mock_send: MagicMock, email_service: EmailService) -> None:
        """Test that a delivery error comes back as an unsuccessful result."""
        mock_send.side_effect = RuntimeError("resend unavailable")

        result = await email_service.send_invite_email("a@x.com", "Acme")

        assert result["success"] is False
        assert "resend unavailable" in result["error"]
