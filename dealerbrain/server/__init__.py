"""
dealerbrain Server - FastAPI HTTP layer over the dealer AI
"""

from dealerbrain.server.app import app, create_app

__all__ = ["app", "create_app"]
