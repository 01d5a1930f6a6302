"""ASGI config for the storage rental service.

The API is plain HTTP; the ASGI entry point exists so the project can be
served by uvicorn/daphne as well as by WSGI servers.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Production servers should set DJANGO_SETTINGS_MODULE explicitly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
