"""
HTTP API package exposing the relay over FastAPI.
"""

from chat_relay.api.app import create_app

__all__ = ["create_app"]
