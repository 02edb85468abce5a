# ecommerce/config.py
import os
import binascii
from datetime import timedelta

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', binascii.hexlify(os.urandom(24)).decode())

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    DATABASE_PATH = os.path.join(BASE_DIR, 'ecommerce.db')

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', f'sqlite:///{DATABASE_PATH}')

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.getenv('JWT_EXPIRES_DAYS', 7)))

    # Product photos above this many bytes are rejected before persistence
    MAX_PHOTO_SIZE = int(os.getenv('MAX_PHOTO_SIZE', 1000000))
    PRODUCTS_PER_PAGE = int(os.getenv('PRODUCTS_PER_PAGE', 6))

    BRAINTREE_ENVIRONMENT = os.getenv('BRAINTREE_ENVIRONMENT', 'sandbox')
    BRAINTREE_MERCHANT_ID = os.getenv('BRAINTREE_MERCHANT_ID')
    BRAINTREE_PUBLIC_KEY = os.getenv('BRAINTREE_PUBLIC_KEY')
    BRAINTREE_PRIVATE_KEY = os.getenv('BRAINTREE_PRIVATE_KEY')

    ADMIN_USERS_FILE = os.getenv('ADMIN_USERS_FILE', os.path.join(BASE_DIR, 'admin_user.json'))

    PASSWORD_HASH_METHOD = os.getenv('PASSWORD_HASH_METHOD', 'pbkdf2:sha256:600000')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret'
    JWT_SECRET_KEY = 'testing-jwt-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_USERS_FILE = None
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    BRAINTREE_MERCHANT_ID = 'merchant'
    BRAINTREE_PUBLIC_KEY = 'public'
    BRAINTREE_PRIVATE_KEY = 'private'
