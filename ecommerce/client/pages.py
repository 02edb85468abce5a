# ecommerce/client/pages.py
from collections import namedtuple
import requests
from ecommerce.logging_config import setup_logging

logger = setup_logging()

PageResult = namedtuple('PageResult', ['ok', 'message', 'redirect'])

GENERIC_ERROR = 'Something went wrong'


class LoginPage:
    def __init__(self, api, auth_store):
        self.api = api
        self.auth_store = auth_store

    def submit(self, email, password, next_path=None):
        try:
            data = self.api.post('/api/v1/auth/login', {'email': email, 'password': password})
        except requests.RequestException as e:
            logger.error(f"Login request failed: {e}")
            return PageResult(False, GENERIC_ERROR, None)

        if not data.get('success'):
            return PageResult(False, data.get('message'), None)

        self.auth_store.set_auth(data)
        return PageResult(True, data.get('message'), next_path or '/')

    def forgot_password(self):
        return PageResult(True, None, '/forgot-password')

    def logout(self):
        self.auth_store.clear()
        return PageResult(True, 'Logout Successfully', '/login')


class OrdersPage:
    title = 'Your Orders'

    def __init__(self, api, auth_store):
        self.api = api
        self.auth_store = auth_store
        self.orders = []

    def load(self):
        if not self.auth_store.token:
            return self.orders
        try:
            self.orders = self.api.get('/api/v1/auth/orders')
        except requests.RequestException as e:
            logger.error(f"Could not load orders: {e}")
        return self.orders
