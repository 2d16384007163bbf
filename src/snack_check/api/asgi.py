"""ASGI entrypoint for the SnackCheck API."""

from snack_check.api.app import create_app
from snack_check.containers import build_container

app = create_app(build_container())
