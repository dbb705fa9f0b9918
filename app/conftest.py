"""
Project-wide pytest setup.

Tests run without Redis or a broker: the cache and channel layer are
in-process and Celery executes notification tasks inline. Per-app
fixtures live in each app's tests/conftest.py.
"""

import os
from pathlib import Path

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

TEST_LAYER_MARKERS = {"unit", "integration", "e2e"}

# Test module name -> marker; anything unlisted hits the database
MARKER_BY_MODULE = {
    "test_integration.py": "e2e",
    "test_models.py": "unit",
    "test_serializers.py": "unit",
    "test_realtime.py": "unit",
    "test_result.py": "unit",
}


def pytest_configure():
    django.setup()

    from django.conf import settings

    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
    }
    settings.SESSION_ENGINE = "django.contrib.sessions.backends.db"
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
    }

    from config.celery import app as celery_app

    celery_app.conf.CELERY_TASK_ALWAYS_EAGER = True
    celery_app.conf.CELERY_TASK_EAGER_PROPAGATES = False


def pytest_collection_modifyitems(items):
    """Tag each test unit, integration or e2e from its module name."""
    for item in items:
        if {marker.name for marker in item.iter_markers()} & TEST_LAYER_MARKERS:
            continue
        module = Path(str(item.fspath)).name
        item.add_marker(getattr(pytest.mark, MARKER_BY_MODULE.get(module, "integration")))


@pytest.fixture(autouse=True)
def _clear_channel_layers():
    """Each test gets its own in-memory layer, so groups never carry over."""
    from channels.layers import channel_layers

    channel_layers.backends.clear()
    yield
    channel_layers.backends.clear()


def _truncate_with_cascade_on_postgresql():
    # Transactional tests flush every table; on PostgreSQL the foreign keys
    # between chats, companies and users need TRUNCATE ... CASCADE.
    from django.db.backends.postgresql import operations

    sql_flush = operations.DatabaseOperations.sql_flush

    def sql_flush_cascade(self, style, tables, *, reset_sequences=False, allow_cascade=False):
        return sql_flush(
            self, style, tables, reset_sequences=reset_sequences, allow_cascade=True
        )

    operations.DatabaseOperations.sql_flush = sql_flush_cascade


_truncate_with_cascade_on_postgresql()
