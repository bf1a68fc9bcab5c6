# tennis_camp/wsgi.py
"""
WSGI config for the tennis camp project.

This module exposes the WSGI callable as a module-level variable
named ``application``, used by Gunicorn, uWSGI or ``runserver``.
"""

import os
from django.core.wsgi import get_wsgi_application

# Set the default Django settings module if not already defined
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tennis_camp.settings")

#: The WSGI application callable used by WSGI servers
application = get_wsgi_application()
