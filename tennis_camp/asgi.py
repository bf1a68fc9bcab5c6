# tennis_camp/asgi.py
"""
ASGI entry point for the tennis camp project.

Exposes ``application`` for ASGI servers (Uvicorn, Daphne). Requests
are still served one at a time per worker; the registration and
payment views perform their I/O sequentially.
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tennis_camp.settings")

#: The ASGI application callable used by ASGI servers
application = get_asgi_application()
