"""ASGI entrypoint for the KitchenWiz API."""

from kitchen_wiz.api.app import create_app
from kitchen_wiz.containers import build_container

app = create_app(build_container())
