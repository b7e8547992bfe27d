"""
WSGI config for the onepoint project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "onepoint.settings")

application = get_wsgi_application()
