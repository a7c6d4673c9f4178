"""
Routes package for the OTP auth application
"""
# Export blueprints for registration in app.py
from routes.public import public_bp
from routes.auth import auth_bp

__all__ = [
    'public_bp',
    'auth_bp',
]
