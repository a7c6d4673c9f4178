"""
Email utility functions
"""
from concurrent.futures import ThreadPoolExecutor

from flask import current_app
from flask_mail import Mail, Message

mail = Mail()

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix='mail')


def _ensure_mail_configured():
    if not current_app.config.get('MAIL_SERVER'):
        raise RuntimeError("MAIL_SERVER not configured. Please set MAIL_SERVER environment variable.")
    if not current_app.config.get('MAIL_USERNAME'):
        raise RuntimeError("MAIL_USERNAME not configured. Please set MAIL_USERNAME environment variable.")


def send_email(subject, recipients, body, html=None):
    """
    Send an email

    Args:
        subject: Email subject
        recipients: List of recipient email addresses
        body: Plain text body
        html: HTML body (optional)
    """
    _ensure_mail_configured()
    msg = Message(
        subject=subject,
        recipients=recipients,
        body=body,
        html=html
    )
    try:
        mail.send(msg)
    except Exception as e:
        current_app.logger.error(f"SMTP error sending '{subject}' to {', '.join(recipients)}: {str(e)}", exc_info=True)
        raise


def send_verification_otp_email(email: str, otp: str) -> None:
    """Send the registration code. Subject: "Email Verification"."""
    body = f"Your OTP for email verification is {otp}"
    send_email("Email Verification", [email], body, html=_otp_email_html(
        "Verify Your Email Address",
        "Use the code below to verify your email:",
        otp,
    ))


def send_password_reset_otp_email(email: str, otp: str) -> None:
    """Send the password reset code. Raises on transport failure."""
    body = f"Your OTP for resetting your password is {otp}. It will expire in 1 hour."
    send_email("Your OTP for password reset", [email], body, html=_otp_email_html(
        "Reset Your Password",
        "Use the code below to reset your password. It will expire in 1 hour.",
        otp,
    ))


def _log_send_result(app, description, exc):
    if exc is not None:
        app.logger.error(f"Failed to send {description}: {exc}", exc_info=exc)
    else:
        app.logger.info(f"Sent {description}")


def send_async(description, fn, *args, **kwargs):
    """
    Run a send function as a background task inside an app context.

    The outcome is always logged, so failures are never lost. Returns the
    Future of the background task, or None when MAIL_SEND_ASYNC is
    disabled and the send ran inline.
    """
    app = current_app._get_current_object()

    def task():
        with app.app_context():
            fn(*args, **kwargs)

    if not app.config.get('MAIL_SEND_ASYNC', True):
        try:
            task()
        except Exception as e:
            _log_send_result(app, description, e)
        else:
            _log_send_result(app, description, None)
        return None

    future = _executor.submit(task)
    future.add_done_callback(lambda f: _log_send_result(app, description, f.exception()))
    return future


def _otp_email_html(title: str, intro: str, otp: str) -> str:
    """Clean HTML template for OTP emails."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>{title}</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 480px; margin: 0 auto; padding: 24px;">
        <h2 style="color: #1a1a2e;">{title}</h2>
        <p>{intro}</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px; color: #16213e;">{otp}</p>
        <p style="color: #666;">This code expires in 1 hour. Do not share it with anyone.</p>
        <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
        <p style="font-size: 12px; color: #999;">If you did not request this, you can ignore this email.</p>
    </body>
    </html>
    """
