"""
Flask extensions shared by the app factory and the blueprints
"""
from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_socketio import SocketIO

socketio = SocketIO()
limiter = Limiter(key_func=get_remote_address)


def get_services():
    """Per-app service registry populated by create_app"""
    return current_app.extensions["ouranimelist"]


def get_catalog_store():
    return get_services()["catalog_store"]
