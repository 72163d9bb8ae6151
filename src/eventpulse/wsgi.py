"""WSGI config for the EventPulse project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventpulse.settings")

application = get_wsgi_application()
