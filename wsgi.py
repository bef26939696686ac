"""WSGI entry point for the todo API."""

import atexit
import os

from todo_app import create_app, dispose_engine

app = create_app(os.getenv("FLASK_ENV", "production"))
atexit.register(dispose_engine, app)
