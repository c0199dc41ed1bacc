"""
Todo Items Service package.

A FastAPI service for managing todo items with tags, free-text search,
filtering, sorting and page-number pagination. The ASGI app lives at
todo_api.main:app; use todo_api.main.create_app for custom settings.
"""

__version__ = "0.1.0"
