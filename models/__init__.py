"""
Models package for the OTP auth application
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models here to ensure they're registered
from models.user import User

__all__ = [
    'db',
    'User',
]
