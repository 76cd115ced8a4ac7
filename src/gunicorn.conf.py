"""
Gunicorn configuration for the OrgHub API.

Bind address and worker count come from the pydantic_settings env.
Request logging is left to django-structlog; gunicorn writes its own
lifecycle messages to stderr.
"""

import multiprocessing

from src.config.env import env

wsgi_app = "src.wsgi:application"
proc_name = "orghub"

# ── Socket and workers ──────────────────────────────────────────────────

bind = env.GUNICORN_BIND
workers = env.GUNICORN_WORKERS or (multiprocessing.cpu_count() * 2 + 1)
worker_class = "sync"
worker_tmp_dir = "/dev/shm"

timeout = 60
graceful_timeout = 30
keepalive = 5

# ── Logging ─────────────────────────────────────────────────────────────

accesslog = None
errorlog = "-"
loglevel = "info"

# ── Request limits ──────────────────────────────────────────────────────
# Avatars, logos and CBL PDFs travel inline as data URIs in JSON bodies.

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
