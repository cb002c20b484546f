"""
Product API Package

In-memory product catalogue served over HTTP with FastAPI.
"""

from product_api.app import create_app

__all__ = ['create_app']
