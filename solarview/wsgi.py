"""
WSGI entry point for hosts without ASGI support.
Wraps the FastAPI application with a2wsgi.
"""
from a2wsgi import ASGIMiddleware  # type: ignore
from solarview.main import app

application = ASGIMiddleware(app)  # type: ignore
