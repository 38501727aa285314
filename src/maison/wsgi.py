"""WSGI config for the Maison project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "maison.settings")

application = get_wsgi_application()
