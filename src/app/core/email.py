"""
Email Service using Resend

Handles sending emails for the student registration request flow.
Emails are a courtesy on top of in-app notifications: callers send them
after their transaction commits and never fail a request because of them.
"""

import asyncio
import logging
import os
from html import escape

import resend

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = os.getenv("RESEND_API_KEY")

# Configurations
EMAIL_FROM = os.getenv("EMAIL_FROM", "MUTOVUTSS <noreply@mutovutss.school>")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

_STYLE = """
        body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
        .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
        .header { color: #1a365d; margin-bottom: 24px; }
        .info-box { background-color: #f3f4f6; padding: 16px; border-radius: 8px; margin: 16px 0; }
        .button { display: inline-block; background-color: #1a365d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }
        .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
"""


def _render(title: str, body_html: str) -> str:
    """Wrap a message body in the common email layout."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{_STYLE}</style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{title}</h1>
            {body_html}
            <div class="footer">
                <p>MUTOVUTSS - School Management System</p>
            </div>
        </div>
    </body>
    </html>
    """


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent successfully
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": EMAIL_FROM,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_registration_received(
    to_email: str,
    parent_name: str,
    student_name: str,
) -> bool:
    """Acknowledge a submitted registration request."""
    # Escape user inputs to prevent XSS
    safe_parent_name = escape(parent_name)
    safe_student_name = escape(student_name)

    html_content = _render(
        "Registration Request Received",
        f"""
            <p>Dear {safe_parent_name},</p>
            <p>We have received your registration request for <strong>{safe_student_name}</strong>.</p>
            <p>The school administration will review it and you will be notified of the decision.</p>
        """,
    )
    return await send_email(
        to_email=to_email,
        subject=f"Registration request received for {safe_student_name}",
        html_content=html_content,
    )


async def send_registration_approved(
    to_email: str,
    parent_name: str,
    student_name: str,
) -> bool:
    """Tell the parent their registration request was approved."""
    safe_parent_name = escape(parent_name)
    safe_student_name = escape(student_name)

    html_content = _render(
        "Registration Approved",
        f"""
            <p>Dear {safe_parent_name},</p>
            <p>Your registration request for <strong>{safe_student_name}</strong> has been approved.</p>
            <div class="info-box">
                <p>Sign in to the parent portal to follow attendance, documents and school updates.</p>
            </div>
            <a href="{FRONTEND_URL}/login" class="button">Open Parent Portal</a>
        """,
    )
    return await send_email(
        to_email=to_email,
        subject=f"Registration approved for {safe_student_name}",
        html_content=html_content,
    )


async def send_registration_rejected(
    to_email: str,
    parent_name: str,
    student_name: str,
    reason: str | None = None,
) -> bool:
    """Tell the parent their registration request was rejected."""
    safe_parent_name = escape(parent_name)
    safe_student_name = escape(student_name)

    reason_html = ""
    if reason:
        reason_html = f'<div class="info-box"><p><strong>Reason:</strong> {escape(reason)}</p></div>'

    html_content = _render(
        "Registration Not Approved",
        f"""
            <p>Dear {safe_parent_name},</p>
            <p>Your registration request for <strong>{safe_student_name}</strong> has been rejected.</p>
            {reason_html}
            <p>Please contact the school office if you have any questions.</p>
        """,
    )
    return await send_email(
        to_email=to_email,
        subject=f"Registration update for {safe_student_name}",
        html_content=html_content,
    )
