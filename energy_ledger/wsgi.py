"""
WSGI config for energy_ledger project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "energy_ledger.settings")

application = get_wsgi_application()
