"""
Public routes: liveness and database health
"""
from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import db

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    return jsonify({"success": True, "message": "API is running..."})


@public_bp.route('/health')
def health():
    """Report whether the database answers a trivial query"""
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Health check failed: %s", e)
        return jsonify({"success": False, "error": "Database unavailable"}), 503
    return jsonify({"success": True, "message": "ok", "database": "ok"})
