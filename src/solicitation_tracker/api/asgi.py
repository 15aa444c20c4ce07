"""ASGI entrypoint for the solicitation tracker API."""

from solicitation_tracker.api.app import create_app
from solicitation_tracker.containers import build_container

app = create_app(build_container())
