"""HTTP transport layer."""

from .api_server import app

__all__ = ['app']
