"""ASGI entrypoint for the nutrition API."""

from avo_nutrition.api.app import create_app
from avo_nutrition.containers import build_container

app = create_app(build_container())
