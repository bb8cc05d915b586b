"""
WSGI config for trackboard project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "trackboard.settings")

application = get_wsgi_application()
