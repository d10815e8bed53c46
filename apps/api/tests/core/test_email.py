"""
Unit tests for the email service.
"""

import smtplib
from unittest.mock import patch

import pytest

from app.core.config import Settings
from app.core.email import (
    build_message,
    log_failed_email,
    send_contact_notification,
    send_email,
)


@pytest.fixture
def smtp_config(tmp_path):
    return Settings(
        smtp_host="smtp.school.test",
        smtp_user="mailer",
        smtp_pass="secret",
        resend_api_key=None,
        log_dir=str(tmp_path),
        notification_email="admissions@school.ng",
    )


@pytest.fixture
def fallback_config(tmp_path):
    return Settings(
        smtp_host="smtp.school.test",
        resend_api_key="re_test_key",
        log_dir=str(tmp_path),
    )


def _failure_lines(tmp_path):
    logs = list((tmp_path / "email_failures").glob("*.log"))
    assert len(logs) == 1
    return logs[0].read_text(encoding="utf-8").splitlines()


class TestBuildMessage:
    """Tests for build_message."""

    def test_multipart_with_reply_to(self, smtp_config):
        message = build_message(
            "office@school.ng",
            "Hello",
            "<p>Hi</p>",
            "Hi",
            reply_to="parent@gmail.com",
            reply_to_name="Ngozi Okafor",
            config=smtp_config,
        )

        assert message["To"] == "office@school.ng"
        assert "parent@gmail.com" in message["Reply-To"]
        assert message.get_content_type() == "multipart/alternative"
        html = message.get_body(preferencelist=("html",)).get_content()
        assert smtp_config.school_name in html

    def test_no_reply_to_header_when_absent(self, smtp_config):
        message = build_message("office@school.ng", "Hello", "<p>Hi</p>", "Hi", config=smtp_config)
        assert message["Reply-To"] is None


class TestSendEmail:
    """Tests for send_email transport selection."""

    @pytest.mark.asyncio
    async def test_smtp_success(self, smtp_config, tmp_path):
        with patch("app.core.email._send_via_smtp") as mock_smtp:
            sent = await send_email("office@school.ng", "Hi", "<p>Hi</p>", "Hi", config=smtp_config)

        assert sent is True
        mock_smtp.assert_called_once()
        assert not (tmp_path / "email_failures").exists()

    @pytest.mark.asyncio
    async def test_falls_back_to_resend(self, fallback_config):
        with (
            patch("app.core.email._send_via_smtp", side_effect=smtplib.SMTPException("down")),
            patch("app.core.email._send_via_resend", return_value="email_123") as mock_resend,
        ):
            sent = await send_email("office@school.ng", "Hi", "<p>Hi</p>", "Hi", config=fallback_config)

        assert sent is True
        mock_resend.assert_called_once()

    @pytest.mark.asyncio
    async def test_all_transports_fail_logs_attempt(self, fallback_config, tmp_path):
        with (
            patch("app.core.email._send_via_smtp", side_effect=OSError("refused")),
            patch("app.core.email._send_via_resend", side_effect=Exception("bad key")),
        ):
            sent = await send_email("office@school.ng", "Report", "<p>x</p>", "x", config=fallback_config)

        assert sent is False
        lines = _failure_lines(tmp_path)
        assert len(lines) == 1
        assert "TO: office@school.ng | SUBJECT: Report" in lines[0]

    @pytest.mark.asyncio
    async def test_no_transport_configured(self, tmp_path):
        config = Settings(smtp_host=None, resend_api_key=None, log_dir=str(tmp_path))

        sent = await send_email("office@school.ng", "Hi", "<p>Hi</p>", "Hi", config=config)

        assert sent is False
        assert len(_failure_lines(tmp_path)) == 1

    @pytest.mark.asyncio
    async def test_line_breaks_removed_from_headers(self, smtp_config):
        with patch("app.core.email._send_via_smtp") as mock_smtp:
            sent = await send_email(
                "office@school.ng",
                "Hi\r\nBcc: x@y.z",
                "<p>Hi</p>",
                "Hi",
                reply_to="parent@gmail.com",
                reply_to_name="Ngozi\nOkafor",
                config=smtp_config,
            )

        assert sent is True
        message = mock_smtp.call_args.args[0]
        assert message["Subject"] == "Hi Bcc: x@y.z"
        assert message["Bcc"] is None
        assert "Ngozi Okafor" in message["Reply-To"]

    @pytest.mark.asyncio
    async def test_unbuildable_message_still_falls_back(self, fallback_config):
        with (
            patch("app.core.email.build_message", side_effect=ValueError("bad header")),
            patch("app.core.email._send_via_resend", return_value="email_456") as mock_resend,
        ):
            sent = await send_email("office@school.ng", "Hi", "<p>Hi</p>", "Hi", config=fallback_config)

        assert sent is True
        mock_resend.assert_called_once()

    @pytest.mark.asyncio
    async def test_unbuildable_message_is_logged_when_nothing_else_works(self, smtp_config, tmp_path):
        with patch("app.core.email.build_message", side_effect=ValueError("bad header")):
            sent = await send_email(
                "office@school.ng", "Multi\nline", "<p>Hi</p>", "Hi", config=smtp_config
            )

        assert sent is False
        lines = _failure_lines(tmp_path)
        assert lines[0].endswith("TO: office@school.ng | SUBJECT: Multi line")

    @pytest.mark.asyncio
    async def test_invalid_reply_to_dropped(self, smtp_config):
        with patch("app.core.email._send_via_smtp") as mock_smtp:
            await send_email(
                "office@school.ng",
                "Hi",
                "<p>Hi</p>",
                "Hi",
                reply_to="not valid@",
                config=smtp_config,
            )

        message = mock_smtp.call_args.args[0]
        assert message["Reply-To"] is None


class TestNotifications:
    """Tests for the form notification helpers."""

    @pytest.mark.asyncio
    async def test_contact_notification_escapes_html(self, smtp_config):
        with patch("app.core.email._send_via_smtp") as mock_smtp:
            sent = await send_contact_notification(
                name="<b>Musa</b>",
                email="musa@gmail.com",
                subject="Fees",
                message="Line one\n<script>alert(1)</script>",
                config=smtp_config,
            )

        assert sent is True
        message = mock_smtp.call_args.args[0]
        assert message["Subject"] == "New Contact Message: Fees"
        assert message["To"] == "admissions@school.ng"
        html = message.get_body(preferencelist=("html",)).get_content()
        assert "<script>" not in html
        assert "&lt;b&gt;Musa&lt;/b&gt;" in html

    def test_log_failed_email_appends(self, smtp_config, tmp_path):
        log_failed_email("a@school.ng", "One", smtp_config)
        log_failed_email("b@school.ng", "Two", smtp_config)

        lines = _failure_lines(tmp_path)
        assert len(lines) == 2
        assert lines[1].endswith("TO: b@school.ng | SUBJECT: Two")
