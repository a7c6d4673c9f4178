"""
User model definition
"""
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import validates

from models import db
from utils.auth_utils import hash_password, verify_password


class User(UserMixin, db.Model):
    """Customer account with email verification and one-time code state"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_verified = db.Column(db.Boolean, default=False, nullable=False)
    # otp and otp_expires are set and cleared together, see set_otp/clear_otp
    otp = db.Column(db.String(16), nullable=True)
    otp_expires = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @validates('username', 'email')
    def validate_required(self, key, value):
        value = (value or '').strip()
        if not value:
            raise ValueError(f'{key} is required')
        return value

    def set_password(self, password):
        """Set password hash"""
        if not password:
            raise ValueError('password is required')
        self.password_hash = hash_password(password)

    def check_password(self, password):
        """Check if password matches"""
        if not self.password_hash or not password:
            return False
        return verify_password(self.password_hash, password)

    def set_otp(self, code, expires):
        """Attach a pending one-time code valid until `expires`."""
        if not code or expires is None:
            raise ValueError('code and expiry must be set together')
        self.otp = str(code)
        self.otp_expires = expires

    def clear_otp(self):
        self.otp = None
        self.otp_expires = None

    def save(self):
        """Add and commit this user; the session is rolled back on failure."""
        db.session.add(self)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return self

    @classmethod
    def find_one_matching(cls, **filters):
        return cls.query.filter_by(**filters).first()

    @classmethod
    def find_by_credentials(cls, username, password):
        """Return the user owning these credentials, or None."""
        if not username or not password:
            return None
        user = cls.find_one_matching(username=username.strip())
        if user and user.check_password(password):
            return user
        return None

    @classmethod
    def find_pending(cls, email, code, now=None):
        """
        Find the user whose unexpired one-time code matches exactly.

        Returns None for a wrong code, an expired code, or an unknown email.
        """
        if not email or code is None or not str(code).strip():
            return None
        now = now or datetime.utcnow()
        return cls.query.filter(
            cls.email == email.strip(),
            cls.otp == str(code).strip(),
            cls.otp_expires > now,
        ).first()

    def __repr__(self):
        return f'<User {self.username}>'
