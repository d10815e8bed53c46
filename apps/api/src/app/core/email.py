"""
Email Service

Sends notification emails for the website forms.

Transports, in order:
1. SMTP (smtplib, run in a worker thread)
2. Resend HTTP API, when an API key is configured

When every transport fails the attempt is appended to a dated failure log
under ``<log_dir>/email_failures``. Callers treat email as best-effort.
"""

import asyncio
import logging
import re
import smtplib
import ssl
from collections.abc import Sequence
from datetime import datetime
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from pathlib import Path

import resend

from app.core.config import Settings, settings
from app.modules.forms.normalizers import is_strict_email

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"[\r\n]+")

# Initialize Resend with API key
resend.api_key = settings.resend_api_key


def get_email_signature(html: bool, config: Settings = settings) -> str:
    """School signature appended to every outgoing message."""
    if html:
        return (
            '<div style="margin-top: 20px; padding-top: 20px; border-top: 1px solid #eee; '
            'color: #666; font-size: 14px;">'
            f"<strong>{escape(config.school_name)}</strong><br>"
            f"{escape(config.school_address)}<br>"
            f"Phone: {escape(config.school_phone)} | Email: {escape(config.school_email)}"
            "</div>"
        )
    return (
        f"\n\n--\n{config.school_name}\n{config.school_address}\n"
        f"Phone: {config.school_phone} | Email: {config.school_email}"
    )


def single_line(value: str) -> str:
    """Collapse CR/LF runs so user text is safe in a mail header."""
    return _LINE_BREAKS.sub(" ", value).strip()


def log_failed_email(to_email: str, subject: str, config: Settings = settings) -> None:
    """Append a failed send to ``email_failures/YYYY-MM-DD.log``."""
    now = datetime.now()
    failure_dir = Path(config.log_dir) / "email_failures"
    try:
        failure_dir.mkdir(parents=True, exist_ok=True)
        with open(failure_dir / f"{now:%Y-%m-%d}.log", "a", encoding="utf-8") as fh:
            fh.write(f"[{now:%Y-%m-%d %H:%M:%S}] TO: {to_email} | SUBJECT: {subject}\n")
    except OSError as e:
        logger.error(f"Could not write email failure log: {e}")


def build_message(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str,
    reply_to: str | None = None,
    reply_to_name: str | None = None,
    config: Settings = settings,
) -> EmailMessage:
    """Build a multipart/alternative message with the school signature."""
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = formataddr((config.mail_from_name, config.mail_from))
    message["To"] = to_email
    if reply_to:
        message["Reply-To"] = formataddr((reply_to_name or "", reply_to))

    message.set_content(text_content + get_email_signature(False, config))
    message.add_alternative(html_content + get_email_signature(True, config), subtype="html")
    return message


def _send_via_smtp(message: EmailMessage, config: Settings) -> None:
    """Blocking SMTP submission. Raises on any failure."""
    secure = config.smtp_secure.lower()
    if secure == "ssl":
        context = ssl.create_default_context()
        with smtplib.SMTP_SSL(
            config.smtp_host, config.smtp_port, timeout=config.smtp_timeout, context=context
        ) as server:
            if config.smtp_user and config.smtp_pass:
                server.login(config.smtp_user, config.smtp_pass)
            server.send_message(message)
        return

    with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=config.smtp_timeout) as server:
        if secure == "tls":
            server.starttls(context=ssl.create_default_context())
        if config.smtp_user and config.smtp_pass:
            server.login(config.smtp_user, config.smtp_pass)
        server.send_message(message)


def _send_via_resend(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str,
    reply_to: str | None,
    config: Settings,
) -> str:
    resend.api_key = config.resend_api_key
    params: resend.Emails.SendParams = {
        "from": formataddr((config.mail_from_name, config.mail_from)),
        "to": [to_email],
        "subject": subject,
        "html": html_content + get_email_signature(True, config),
        "text": text_content + get_email_signature(False, config),
    }
    if reply_to:
        params["reply_to"] = reply_to
    email = resend.Emails.send(params)
    return email["id"]


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str,
    reply_to: str | None = None,
    reply_to_name: str | None = None,
    config: Settings = settings,
) -> bool:
    """
    Send an email through SMTP, falling back to Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML body (signature is appended)
        text_content: Plain-text alternative (signature is appended)
        reply_to: Address replies should go to, if it validates
        reply_to_name: Display name for the reply-to address
        config: Settings to read transports from

    Returns:
        True if one of the transports accepted the message
    """
    if reply_to and not is_strict_email(reply_to):
        logger.warning("Reply-to address did not validate; sending without it")
        reply_to = None

    subject = single_line(subject)
    if reply_to_name:
        reply_to_name = single_line(reply_to_name)

    if config.smtp_host:
        try:
            message = build_message(
                to_email, subject, html_content, text_content, reply_to, reply_to_name, config
            )
            # smtplib is blocking; keep it off the event loop
            await asyncio.to_thread(_send_via_smtp, message, config)
            logger.info(f"Email sent via SMTP to {to_email}: {subject}")
            return True
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(f"SMTP send to {to_email} failed: {e}")

    if config.resend_api_key:
        try:
            email_id = await asyncio.to_thread(
                _send_via_resend, to_email, subject, html_content, text_content, reply_to, config
            )
            logger.info(f"Email sent via Resend to {to_email}, id: {email_id}")
            return True
        except Exception as e:
            logger.error(f"Resend send to {to_email} failed: {e}")

    if not config.smtp_host and not config.resend_api_key:
        logger.warning("No email transport configured (SMTP_HOST / RESEND_API_KEY)")

    log_failed_email(to_email, subject, config)
    return False


def _html_rows(rows: Sequence[tuple[str, str]]) -> str:
    return "\n".join(
        f"<tr><td style=\"padding: 6px 12px 6px 0; color: #6b7280;\"><strong>{escape(label)}</strong></td>"
        f"<td style=\"padding: 6px 0;\">{escape(value)}</td></tr>"
        for label, value in rows
        if value
    )


def _text_rows(rows: Sequence[tuple[str, str]]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in rows if value)


async def send_application_notification(
    application_id: str,
    student_name: str,
    rows: Sequence[tuple[str, str]],
    reply_to: str | None = None,
    reply_to_name: str | None = None,
    config: Settings = settings,
) -> bool:
    """Notify the admissions office about a new application."""
    safe_application_id = escape(application_id)
    safe_student_name = escape(student_name)

    html_content = f"""
    <div style="font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937;">
        <h2 style="color: #1a365d;">New Admission Application</h2>
        <p>A new application has been submitted for <strong>{safe_student_name}</strong>.</p>
        <p><strong>Application ID:</strong> {safe_application_id}</p>
        <table style="border-collapse: collapse;">
            {_html_rows(rows)}
        </table>
        <p>Reply to this email to contact the parent directly.</p>
    </div>
    """
    text_content = (
        "New Admission Application\n\n"
        f"Application ID: {application_id}\n"
        f"{_text_rows(rows)}\n\n"
        "Reply to this email to contact the parent directly."
    )

    return await send_email(
        to_email=config.notification_recipient,
        subject=f"New Admission Application: {student_name} ({application_id})",
        html_content=html_content,
        text_content=text_content,
        reply_to=reply_to,
        reply_to_name=reply_to_name,
        config=config,
    )


async def send_contact_notification(
    name: str,
    email: str,
    subject: str,
    message: str,
    phone: str | None = None,
    config: Settings = settings,
) -> bool:
    """Forward a contact form message to the school inbox."""
    safe_name = escape(name)
    safe_email = escape(email)
    safe_subject = escape(subject)
    safe_message = escape(message).replace("\n", "<br>\n")

    phone_line = f"<p><strong>Phone:</strong> {escape(phone)}</p>" if phone else ""
    html_content = f"""
    <div style="font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937;">
        <h3>New Contact Form Submission</h3>
        <p><strong>Name:</strong> {safe_name}</p>
        <p><strong>Email:</strong> {safe_email}</p>
        {phone_line}
        <p><strong>Subject:</strong> {safe_subject}</p>
        <p><strong>Message:</strong></p>
        <div style="background: #f5f5f5; padding: 15px; border-radius: 5px;">{safe_message}</div>
    </div>
    """
    text_lines = [
        "New Contact Form Submission",
        "",
        f"Name: {name}",
        f"Email: {email}",
    ]
    if phone:
        text_lines.append(f"Phone: {phone}")
    text_lines += [f"Subject: {subject}", "", "Message:", message]

    return await send_email(
        to_email=config.notification_recipient,
        subject=f"New Contact Message: {subject}",
        html_content=html_content,
        text_content="\n".join(text_lines),
        reply_to=email,
        reply_to_name=name,
        config=config,
    )
