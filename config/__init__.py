"""Top-level package for Django configuration.

Contains the settings modules for the different environments, the URL
root and the WSGI/ASGI entry points of the storage rental service.
"""

# Import the Celery application as soon as Django starts so that
# shared tasks bind to it.
from .celery import app as celery_app  # noqa: F401
