"""
Public routes: home, unauthorized notice, profile
"""
from flask import render_template, Blueprint, abort
from flask_login import current_user

from models.user import User
from utils.auth_utils import verified_required

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    return render_template('index.html')


@public_bp.route('/unauthorized')
def unauthorized():
    return render_template('unauthorized.html', error='You are not authorized to view this page.')


@public_bp.route('/profile')
@verified_required
def profile():
    """Profile page for a logged-in, verified user"""
    user = User.find_one_matching(email=current_user.email)
    if not user:
        abort(404, description='User not found')
    return render_template('profile.html', user=user)
