"""FastAPI adapter exposing ingestion, query and maintenance routes."""

from .app import create_app, main

__all__ = ["create_app", "main"]
