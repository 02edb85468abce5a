# ecommerce/client/auth.py
import os
import json
from ecommerce.logging_config import setup_logging

logger = setup_logging()

AUTH_STORAGE_KEY = 'auth'


class MemoryStorage:
    def __init__(self, items=None):
        self.items = dict(items or {})

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value

    def remove_item(self, key):
        self.items.pop(key, None)


class JSONFileStorage:
    """Key/value storage persisted to a JSON file, written on every change."""

    def __init__(self, path):
        self.path = path

    def _load(self):
        try:
            with open(self.path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.error(f"Error decoding client storage file {self.path}.")
            return {}

    def _save(self, items):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(items, f)

    def get_item(self, key):
        return self._load().get(key)

    def set_item(self, key, value):
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key):
        items = self._load()
        if items.pop(key, None) is not None:
            self._save(items)


class AuthStore:
    """Holds the signed-in user and token for one client session.

    The token is mirrored into the ``Authorization`` header of ``session``
    whenever it changes.
    """

    def __init__(self, storage, session):
        self.storage = storage
        self.session = session
        self._auth = {'user': None, 'token': ''}
        self._sync_header()

    @property
    def auth(self):
        return dict(self._auth)

    @property
    def token(self):
        return self._auth['token']

    def hydrate(self):
        raw = self.storage.get_item(AUTH_STORAGE_KEY)
        if raw:
            try:
                data = json.loads(raw)
            except (TypeError, ValueError) as e:
                logger.error(f"Ignoring unreadable stored auth: {e}")
            else:
                if isinstance(data, dict):
                    self._auth = {'user': data.get('user'), 'token': data.get('token') or ''}
                else:
                    logger.error(f"Ignoring stored auth that is not an object: {raw!r}")
        self._sync_header()
        return self.auth

    def set_auth(self, data):
        """Adopt ``data`` (a login response body) and persist it as-is."""
        self._auth = {'user': data.get('user'), 'token': data.get('token') or ''}
        self.storage.set_item(AUTH_STORAGE_KEY, json.dumps(data))
        self._sync_header()

    def clear(self):
        self._auth = {'user': None, 'token': ''}
        self.storage.remove_item(AUTH_STORAGE_KEY)
        self._sync_header()

    def _sync_header(self):
        if self._auth['token']:
            self.session.headers['Authorization'] = self._auth['token']
        else:
            self.session.headers.pop('Authorization', None)
