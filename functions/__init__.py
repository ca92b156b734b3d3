"""Serverless entry points (Netlify / API Gateway proxy events)."""

from . import login, register, search

__all__ = [
    "login",
    "register",
    "search",
]
