"""
Authentication utility functions
"""
from functools import wraps

from flask import current_app, redirect, url_for
from flask_login import current_user
from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password):
    """Generate password hash"""
    return generate_password_hash(password)


def verify_password(password_hash, password):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


def verified_required(view):
    """
    Allow the view only for a logged-in user whose email is verified.

    Anonymous users go through Flask-Login's unauthorized handler (login
    page with ?next=); logged-in but unverified users go to the OTP page.
    """
    @wraps(view)
    def decorated_view(*args, **kwargs):
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()
        if not current_user.is_verified:
            return redirect(url_for('auth.verify_otp'))
        return view(*args, **kwargs)
    return decorated_view
