"""ASGI entrypoint for the EcoBite API."""

from ecobite.api.app import create_app
from ecobite.containers import build_container

app = create_app(build_container())
