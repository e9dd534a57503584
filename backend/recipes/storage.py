"""
Key-value storage for the recipe book.

Values are JSON documents stored under string keys. ``load`` hands back the
caller's default when a key is absent or its stored value does not parse;
``save`` replaces the whole value.
"""
import copy
import json
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict

from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction

from recipes.models import StoredCollection

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract string-keyed store of JSON-compatible values."""

    @abstractmethod
    def load(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""

    @contextmanager
    def atomic(self):
        """Group several saves so they succeed or fail together."""
        yield

    @staticmethod
    def _encode(value: Any) -> str:
        return json.dumps(value, cls=DjangoJSONEncoder)

    @staticmethod
    def _decode(key: str, raw: str, default: Any) -> Any:
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for key '%s' is not valid JSON; using default", key)
            return default


class DatabaseKeyValueStore(KeyValueStore):
    """Key-value store backed by the ``StoredCollection`` table."""

    def load(self, key: str, default: Any = None) -> Any:
        entry = StoredCollection.objects.filter(key=key).first()
        if entry is None:
            return default
        return self._decode(key, entry.value, default)

    def save(self, key: str, value: Any) -> None:
        StoredCollection.objects.update_or_create(
            key=key,
            defaults={'value': self._encode(value)},
        )
        logger.debug("Saved key '%s'", key)

    @contextmanager
    def atomic(self):
        with transaction.atomic():
            yield


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; values are kept encoded so parsing behaves like the database store."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        return self._decode(key, raw, default)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = self._encode(value)

    def save_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw

    @contextmanager
    def atomic(self):
        snapshot = copy.copy(self._data)
        try:
            yield
        except Exception:
            self._data = snapshot
            raise
