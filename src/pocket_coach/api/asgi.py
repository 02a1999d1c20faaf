"""ASGI entrypoint for the coaching API."""

from pocket_coach.api.app import create_app
from pocket_coach.containers import build_container

app = create_app(build_container())
