"""
Main Flask application for the OTP auth site
"""
import logging

from flask import Flask, render_template
from flask_login import LoginManager

from config import Config
from models import db
from models.user import User
from utils.mail import mail

# Initialize login manager (no DB access at import time)
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Please log in to access this page."
login_manager.login_message_category = "info"


@login_manager.user_loader
def load_user(user_id):
    """Load user for Flask-Login (runs in request context)."""
    return db.session.get(User, int(user_id))


def create_app(config_class=Config):
    """Application factory pattern. DB init runs inside app_context; non-fatal on failure."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)

    register_error_handlers(app)

    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            logging.getLogger(__name__).warning("Database init skipped (non-fatal): %s", e)

    from routes import public_bp, auth_bp
    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)

    return app


def register_error_handlers(app):
    """Generic pages for unhandled errors; details go to the log only."""

    @app.errorhandler(404)
    def handle_404_error(e):
        return render_template('error.html', message=e.description or 'Page not found'), 404

    @app.errorhandler(500)
    def handle_500_error(e):
        # Flask has already logged the original exception
        db.session.rollback()
        return render_template('error.html', message='Internal server error. Please try again later.'), 500
