"""Middleware modules for FastAPI application"""
from .cors import CORSHeadersMiddleware, CORS_HEADERS

__all__ = ["CORSHeadersMiddleware", "CORS_HEADERS"]
