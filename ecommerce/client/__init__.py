# ecommerce/client/__init__.py
from ecommerce.client.auth import AuthStore, JSONFileStorage, MemoryStorage
from ecommerce.client.api import ApiClient
from ecommerce.client.pages import LoginPage, OrdersPage, PageResult
