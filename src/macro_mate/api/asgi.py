"""ASGI entrypoint, e.g. ``uvicorn macro_mate.api.asgi:app``."""

from macro_mate.api.app import create_app
from macro_mate.config import Settings
from macro_mate.containers import build_container

app = create_app(build_container(Settings()))
