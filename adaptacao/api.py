"""Entry point for UI code: one RecordsApi, picked once from the settings.

``BACKEND=local`` keeps everything in a JSON document (``DATA_FILE``) with
the fixed credential table; ``BACKEND=remote`` talks to the records HTTP
API at ``API_URL``.
"""
from .application.facade import LocalRecordsApi, RecordsApi
from .config import Settings, settings as default_settings
from .infrastructure.backends import JsonDocumentBackend
from .infrastructure.http_client import HttpRecordsApi


def build_api(settings: Settings | None = None) -> RecordsApi:
    settings = settings or default_settings
    backend = settings.BACKEND.lower()
    if backend == "local":
        return LocalRecordsApi(JsonDocumentBackend(settings.DATA_FILE or None))
    if backend == "remote":
        return HttpRecordsApi(base_url=settings.API_URL)
    raise ValueError(f"Unknown BACKEND {settings.BACKEND!r}, expected 'local' or 'remote'")
