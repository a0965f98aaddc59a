"""
Authentication routes: OTP signup, login, password reset and profile.
Domain errors raised here are rendered by the AppError handler in app.py.
"""
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from utils.accounts import ProfilePatch, get_account_service
from utils.validators import get_json_body

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

OTP_SENT_MSG = "OTP sent to your email"
RESET_OTP_SENT_MSG = "OTP sent for password reset"


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Send a signup OTP to an unregistered email"""
    data = get_json_body(request)
    email = data.get('email')
    current_app.logger.info("Signup request for %s", email)

    get_account_service().request_signup(data.get('username'), email, data.get('password'))
    return jsonify({"success": True, "message": OTP_SENT_MSG})


@auth_bp.route('/verify-otp-and-register', methods=['POST'])
def verify_otp_and_register():
    """Verify the signup OTP and create the account"""
    data = get_json_body(request)
    current_app.logger.info("Verify OTP and register request for %s", data.get('email'))

    user = get_account_service().complete_signup(
        data.get('username'), data.get('email'), data.get('password'), data.get('otp')
    )
    return jsonify({"success": True, "message": "Registration successful", "user": user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body(request)
    user, token = get_account_service().login(data.get('email'), data.get('password'))
    current_app.logger.info("Login for user id=%s", user.id)
    return jsonify({"success": True, "message": "Login successful", "user": user.to_dict(), "token": token})


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Send a password reset OTP"""
    data = get_json_body(request)
    current_app.logger.info("Forgot password request for %s", data.get('email'))

    get_account_service().request_password_reset(data.get('email'))
    return jsonify({"success": True, "message": RESET_OTP_SENT_MSG})


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    data = get_json_body(request)
    current_app.logger.info("Reset password request for %s", data.get('email'))

    get_account_service().reset_password(data.get('email'), data.get('otp'), data.get('newPassword') or data.get('new_password'))
    return jsonify({"success": True, "message": "Password reset successful"})


@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    user = get_account_service().get_profile(current_user.id)
    return jsonify({"success": True, "user": user.to_dict()})


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    """Edit username, email or password"""
    patch = ProfilePatch.from_dict(get_json_body(request))
    user = get_account_service().update_profile(current_user.id, patch)
    return jsonify({"success": True, "message": "Profile updated", "user": user.to_dict()})


@auth_bp.route('/profile', methods=['DELETE'])
@login_required
def delete_profile():
    """Delete the account, its pending codes and every record it owns"""
    user_id = current_user.id
    get_account_service().delete_account(user_id)
    return jsonify({"success": True, "message": "Profile deleted"})
