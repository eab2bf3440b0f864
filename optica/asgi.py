"""
ASGI config for the optica project.

The API is plain request/response HTTP, so the ASGI entrypoint is the
stock Django handler.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "optica.settings")

application = get_asgi_application()
