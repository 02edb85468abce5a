# ecommerce/client/api.py
import requests

DEFAULT_TIMEOUT = 10


class ApiClient:
    def __init__(self, base_url, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path, **kwargs):
        response = self.session.get(self._url(path), timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    def post(self, path, payload=None, **kwargs):
        response = self.session.post(self._url(path), json=payload, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    def put(self, path, payload=None, **kwargs):
        response = self.session.put(self._url(path), json=payload, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()
