"""
ASGI config for hospital project.

Only plain HTTP is served; requests are handled one per task.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "hospital.settings")

application = get_asgi_application()
