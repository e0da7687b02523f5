"""ASGI entrypoint for the consultation API."""

from pharmacy_consult.api.app import create_app
from pharmacy_consult.containers import build_container

app = create_app(build_container())
