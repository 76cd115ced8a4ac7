"""
WSGI entry point, served by gunicorn (see gunicorn.conf.py).
"""

import os

from src.config.env import env

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", env.settings_module)

application = get_wsgi_application()
