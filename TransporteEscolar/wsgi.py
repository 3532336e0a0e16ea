"""
WSGI config for TransporteEscolar project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'TransporteEscolar.settings')

application = get_wsgi_application()
