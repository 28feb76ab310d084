"""
Authentication blueprint.
Handles customer registration, login, logout and the current user.
"""

from flask import Blueprint, jsonify, g, Response
import logging

from cashcarry.database import get_stores
from cashcarry.middleware import require_login
from cashcarry.services.auth_service import register_user, authenticate
from cashcarry.services.session_service import get_sessions
from cashcarry.utils.request_data import json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new customer account and log it in."""
    data = json_body()
    token, user = register_user(
        get_stores().users,
        get_sessions(),
        data.get('name'),
        data.get('phone'),
        data.get('password'),
    )
    return jsonify({'token': token, 'user': user.to_public()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login for customers, reps and admins."""
    data = json_body()
    token, user = authenticate(
        get_stores().users,
        get_sessions(),
        data.get('phone'),
        data.get('password'),
    )
    return jsonify({'token': token, 'user': user.to_public()})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Revoke the presented token. Always 204."""
    if get_sessions().revoke(g.get('auth_token')):
        logger.info("Session revoked")
    return Response(status=204)


@auth_bp.route('/me')
@require_login
def me():
    return jsonify(g.user.to_public())
