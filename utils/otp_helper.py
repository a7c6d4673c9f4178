"""
One-time code generation and expiry.
Registration uses a 6-digit numeric code; password reset uses an uppercase hex code.
"""
import secrets
from datetime import datetime, timedelta

from flask import current_app

OTP_MIN = 100000
OTP_MAX = 999999
RESET_CODE_BYTES = 3


def generate_otp() -> str:
    """Uniform random 6-digit numeric code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def generate_reset_code() -> str:
    """Uppercase hex code from 3 random bytes (6 characters)."""
    return secrets.token_hex(RESET_CODE_BYTES).upper()


def otp_expires_at(now=None) -> datetime:
    """Return expiry datetime for a new code, OTP_EXPIRY_SECONDS after `now`."""
    now = now or datetime.utcnow()
    return now + timedelta(seconds=current_app.config["OTP_EXPIRY_SECONDS"])
