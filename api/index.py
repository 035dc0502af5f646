# api/index.py
import os
import sys
from pathlib import Path

from serverless_wsgi import handle_request
from django.core.wsgi import get_wsgi_application

# project root on the path so perf_evaluation / evaluation_app import
BASE_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "perf_evaluation.settings")

application = get_wsgi_application()


def handler(event, context):
    return handle_request(application, event, context)
