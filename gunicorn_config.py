"""
Gunicorn config: bind to 0.0.0.0 and PORT for Railway/Render.
Usage: gunicorn -c gunicorn_config.py wsgi:app
"""
import os

bind = "0.0.0.0:{}".format(os.environ.get("PORT", "5000"))
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
threads = int(os.environ.get("GUNICORN_THREADS", "2"))
timeout = 60
accesslog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
