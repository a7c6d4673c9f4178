"""
Authentication routes: login, register, email verification (OTP), password reset (OTP)
"""
from flask import render_template, request, redirect, url_for, flash, Blueprint, current_app
from flask_login import login_user, logout_user

from models import db
from models.user import User
from utils.mail import send_async, send_verification_otp_email, send_password_reset_otp_email
from utils.otp_helper import generate_otp, generate_reset_code, otp_expires_at

auth_bp = Blueprint('auth', __name__)

LOGIN_FAIL_MSG = "Password or username is incorrect"
REGISTER_FAIL_MSG = "Registration failed"
NO_USER_MSG = "No user found with that email"
OTP_SEND_FAIL_MSG = "Error sending OTP. Please try again later."
OTP_SENT_MSG = "OTP sent to your email. Please check your inbox."
RESET_NO_MATCH_MSG = "No user found or OTP expired"
RESET_PASSWORD_FAIL_MSG = "Error resetting password. Please try again."
RESET_LOGIN_FAIL_MSG = "Error logging in. Please try again."
RESET_SUCCESS_MSG = "Password reset successfully. Welcome back!"


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Username/password login"""
    if request.method == 'POST':
        username = request.form.get('username', '')
        password = request.form.get('password', '')

        user = User.find_by_credentials(username, password)
        if not user:
            flash(LOGIN_FAIL_MSG, 'error')
            return redirect(url_for('auth.login'))

        login_user(user)
        return redirect(url_for('public.profile'))

    return render_template('login.html')


@auth_bp.route('/logout')
def logout():
    logout_user()
    return redirect(url_for('public.home'))


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Create an unverified account and email it a verification code"""
    if request.method == 'GET':
        return render_template('register.html')

    otp = generate_otp()
    try:
        user = User(
            username=request.form.get('username', ''),
            email=request.form.get('email', ''),
        )
        user.set_password(request.form.get('password', ''))
        user.set_otp(otp, otp_expires_at())
        user.save()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error during registration: {str(e)}", exc_info=True)
        flash(REGISTER_FAIL_MSG, 'error')
        return redirect(url_for('auth.register'))

    # The redirect does not wait on the email; the task logs its own failure
    send_async(f"verification OTP to {user.email}", send_verification_otp_email, user.email, otp)
    return redirect(url_for('auth.verify_otp'))


@auth_bp.route('/verifyotp', methods=['GET', 'POST'])
def verify_otp():
    """Consume the registration code and log the user in"""
    if request.method == 'GET':
        return render_template('verifyotp.html')

    email = request.form.get('email', '')
    current_app.logger.debug(f"OTP verification requested for {email}")

    user = User.find_pending(email, request.form.get('otp', ''))
    if not user:
        current_app.logger.info(f"No pending OTP matched for {email}")
        return redirect(url_for('auth.verify_otp'))

    user.is_verified = True
    user.clear_otp()
    try:
        user.save()
    except Exception as e:
        current_app.logger.error(f"Error during verification: {str(e)}", exc_info=True)
        raise
    current_app.logger.info(f"User {user.username} verified")

    if not login_user(user):
        raise RuntimeError(f"Could not log in verified user {user.username}")
    return redirect(url_for('public.profile'))


@auth_bp.route('/forgot', methods=['GET', 'POST'])
def forgot():
    """Email a password reset code"""
    if request.method == 'GET':
        return render_template('forgot.html')

    email = request.form.get('email', '').strip()
    user = User.find_one_matching(email=email) if email else None
    if not user:
        flash(NO_USER_MSG, 'error')
        return redirect(url_for('auth.forgot'))

    otp = generate_reset_code()
    user.set_otp(otp, otp_expires_at())
    try:
        user.save()
    except Exception as e:
        current_app.logger.error(f"Error during forgot password: {str(e)}", exc_info=True)
        raise

    try:
        send_password_reset_otp_email(user.email, otp)
    except Exception as e:
        current_app.logger.error(f"Error sending password reset OTP to {user.email}: {str(e)}", exc_info=True)
        flash(OTP_SEND_FAIL_MSG, 'error')
        return redirect(url_for('auth.forgot'))

    flash(OTP_SENT_MSG, 'success')
    return redirect(url_for('auth.reset'))


@auth_bp.route('/reset', methods=['GET', 'POST'])
def reset():
    """Consume the reset code, set the new password and log the user in"""
    if request.method == 'GET':
        return render_template('reset.html')

    email = request.form.get('email', '')
    user = User.find_pending(email, request.form.get('otp', ''))
    if not user:
        flash(RESET_NO_MATCH_MSG, 'error')
        return redirect(url_for('auth.forgot'))

    try:
        user.set_password(request.form.get('password', ''))
        user.clear_otp()
        user.save()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error setting password: {str(e)}", exc_info=True)
        flash(RESET_PASSWORD_FAIL_MSG, 'error')
        return redirect(url_for('auth.reset'))

    try:
        logged_in = login_user(user)
    except Exception as e:
        current_app.logger.error(f"Error logging in after password reset: {str(e)}", exc_info=True)
        logged_in = False
    if not logged_in:
        flash(RESET_LOGIN_FAIL_MSG, 'error')
        return redirect(url_for('auth.reset'))

    flash(RESET_SUCCESS_MSG, 'success')
    return redirect(url_for('public.profile'))
