"""
ASGI entry point. The API is synchronous; this exists for ASGI servers.
"""
import os

from src.config.env import env

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", env.settings_module)

application = get_asgi_application()
