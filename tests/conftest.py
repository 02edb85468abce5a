import pytest

from ecommerce.app_factory import create_app
from ecommerce.init_db import db as _db
from ecommerce.authentication.models import User, ROLE_ADMIN, ROLE_USER
from ecommerce.authentication.views import hash_password, sign_token
from ecommerce.catalog.models import Category, Product


class FakeGateway:
    """Stands in for ecommerce.orders.views.BraintreeGateway."""

    def __init__(self):
        self.sales = []
        self.voided = []
        self.token_error = None
        self.sale_error = None

    def generate_client_token(self):
        if self.token_error:
            raise self.token_error
        return 'client-token-abc123'

    def sale(self, amount, nonce):
        self.sales.append((amount, nonce))
        if self.sale_error:
            raise self.sale_error
        return {
            'success': True,
            'transaction': {
                'id': 'txn123',
                'status': 'submitted_for_settlement',
                'amount': str(amount),
                'currencyIsoCode': 'USD'
            }
        }

    def void(self, transaction_id):
        self.voided.append(transaction_id)


@pytest.fixture
def app():
    app = create_app('ecommerce.config.TestingConfig')
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway(app):
    fake = FakeGateway()
    app.extensions['braintree'] = fake
    return fake


@pytest.fixture
def make_user(app):
    def _make_user(email='john@test.com', password='123456', role=ROLE_USER, name='John', answer='blue'):
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            phone='12345678',
            address='1 Main Street',
            answer=answer,
            role=role
        )
        _db.session.add(user)
        _db.session.commit()
        return user
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email='admin@test.com', name='Admin', role=ROLE_ADMIN)


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {'Authorization': sign_token(user.id)}
    return _auth_headers


@pytest.fixture
def category(app):
    category = Category(name='Electronics', slug='electronics')
    _db.session.add(category)
    _db.session.commit()
    return category


@pytest.fixture
def make_product(app, category):
    def _make_product(name='Phone', price=100.0, description='A smart phone', product_category=None, **kwargs):
        product = Product(
            name=name,
            slug=name.lower().replace(' ', '-'),
            description=description,
            price=price,
            category=product_category or category,
            quantity=kwargs.pop('quantity', 10),
            shipping=kwargs.pop('shipping', True),
            **kwargs
        )
        _db.session.add(product)
        _db.session.commit()
        return product
    return _make_product


def failing(*args, **kwargs):
    raise RuntimeError('Database error')


@pytest.fixture
def db_error():
    return failing


class BrokenQuery:
    def __getattr__(self, name):
        raise RuntimeError('Database error')


@pytest.fixture
def broken_query():
    return BrokenQuery()
