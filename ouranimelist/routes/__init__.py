"""
API blueprints. Identity always comes from the logged-in session.
"""
from ouranimelist.routes.admin import admin_bp
from ouranimelist.routes.banners import banners_bp
from ouranimelist.routes.system import system_bp

__all__ = ["admin_bp", "banners_bp", "system_bp"]
