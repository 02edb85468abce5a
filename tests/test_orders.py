from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from ecommerce.init_db import db
from ecommerce.orders import views
from ecommerce.orders.models import Order
from ecommerce.orders.views import BraintreeGateway, PaymentGatewayError, cart_total, cart_product_ids


@pytest.fixture
def make_order(app, make_product):
    def _make_order(buyer, created_at, status='Not Process', products=None):
        order = Order(
            buyer=buyer,
            products=products if products is not None else [make_product(name=f'Item {created_at:%Y%m%d}')],
            payment={'success': True},
            status=status,
            created_at=created_at
        )
        db.session.add(order)
        db.session.commit()
        return order
    return _make_order


# Listing

def test_get_orders_only_returns_own_orders(client, user, admin, make_order, auth_headers):
    make_order(user, datetime(2025, 1, 1))
    make_order(admin, datetime(2025, 2, 2))
    make_order(user, datetime(2025, 3, 3))

    response = client.get('/api/v1/auth/orders', headers=auth_headers(user))
    orders = response.get_json()
    assert response.status_code == 200
    assert len(orders) == 2
    assert all(order['buyer'] == {'_id': user.id, 'name': 'John'} for order in orders)
    assert all('photo_data' not in product for order in orders for product in order['products'])


def test_get_orders_empty(client, user, auth_headers):
    response = client.get('/api/v1/auth/orders', headers=auth_headers(user))
    assert response.get_json() == []


def test_get_orders_store_failure(client, user, auth_headers, monkeypatch, broken_query):
    headers = auth_headers(user)
    monkeypatch.setattr(Order, 'query', broken_query)
    response = client.get('/api/v1/auth/orders', headers=headers)
    assert response.status_code == 500
    assert response.get_json() == {
        'success': False,
        'message': 'Error While Getting Orders',
        'error': 'Database error'
    }


def test_get_all_orders_sorted_newest_first(client, user, admin, make_order, auth_headers):
    first = make_order(user, datetime(2025, 1, 1))
    second = make_order(admin, datetime(2025, 2, 2))
    third = make_order(user, datetime(2025, 3, 3))

    response = client.get('/api/v1/auth/all-orders', headers=auth_headers(admin))
    assert response.status_code == 200
    assert [order['_id'] for order in response.get_json()] == [third.id, second.id, first.id]


def test_get_all_orders_requires_admin(client, user, auth_headers):
    response = client.get('/api/v1/auth/all-orders', headers=auth_headers(user))
    assert response.status_code == 401


def test_get_all_orders_store_failure(client, admin, auth_headers, monkeypatch, broken_query):
    headers = auth_headers(admin)
    monkeypatch.setattr(Order, 'query', broken_query)
    response = client.get('/api/v1/auth/all-orders', headers=headers)
    assert response.status_code == 500
    assert response.get_json()['message'] == 'Error While Getting Orders'


# Status updates

def test_update_order_status(client, admin, user, make_order, auth_headers):
    order = make_order(user, datetime(2025, 1, 1))
    response = client.put(f'/api/v1/auth/order-status/{order.id}', json={'status': 'Processing'},
                          headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.get_json()['status'] == 'Processing'
    assert db.session.get(Order, order.id).status == 'Processing'


def test_update_unknown_order_returns_null(client, admin, auth_headers):
    response = client.put('/api/v1/auth/order-status/999', json={'status': 'Processing'},
                          headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.get_json() is None


def test_update_order_invalid_status(client, admin, user, make_order, auth_headers):
    order = make_order(user, datetime(2025, 1, 1))
    response = client.put(f'/api/v1/auth/order-status/{order.id}', json={'status': 'Teleported'},
                          headers=auth_headers(admin))
    assert response.status_code == 500
    assert response.get_json()['message'] == 'Error While Updating Order'
    assert db.session.get(Order, order.id).status == 'Not Process'


def test_update_order_store_failure(client, admin, user, make_order, auth_headers, monkeypatch, db_error):
    order = make_order(user, datetime(2025, 1, 1))
    headers = auth_headers(admin)
    monkeypatch.setattr(db.session, 'commit', db_error)
    response = client.put(f'/api/v1/auth/order-status/{order.id}', json={'status': 'Shipped'}, headers=headers)
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Database error'


# Payments

def test_cart_helpers():
    cart = [{'_id': 1, 'price': 10}, {'_id': 2, 'price': 20.1}, {'_id': 1, 'price': 10}]
    assert cart_total(cart) == Decimal('40.1')
    assert cart_total([]) == Decimal('0')
    assert cart_product_ids(cart) == [1, 2]


def test_payment_token(client, user, auth_headers, gateway):
    response = client.get('/api/v1/product/braintree/token', headers=auth_headers(user))
    assert response.status_code == 200
    assert response.get_json() == {'clientToken': 'client-token-abc123'}


def test_payment_token_gateway_error(client, user, auth_headers, gateway):
    gateway.token_error = PaymentGatewayError('Failed to generate client token')
    response = client.get('/api/v1/product/braintree/token', headers=auth_headers(user))
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to generate client token'


def test_payment_token_unexpected_error_still_responds(client, user, auth_headers, gateway):
    gateway.token_error = RuntimeError('Unexpected error')
    response = client.get('/api/v1/product/braintree/token', headers=auth_headers(user))
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Unexpected error'


def test_payment_charges_cart_total_and_saves_order(client, user, auth_headers, gateway, make_product):
    phone = make_product(name='Phone', price=10)
    cable = make_product(name='Cable', price=20)
    cart = [phone.to_dict(), cable.to_dict(), dict(cable.to_dict(), price=30)]

    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': cart},
                           headers=auth_headers(user))
    assert response.status_code == 200
    assert response.get_json() == {'ok': True}
    assert gateway.sales == [(Decimal('60'), 'nonce')]

    order = Order.query.one()
    assert order.buyer_id == user.id
    assert {product.name for product in order.products} == {'Phone', 'Cable'}
    assert order.payment['transaction']['id'] == 'txn123'
    assert order.status == 'Not Process'


def test_payment_declined_creates_no_order(client, user, auth_headers, gateway):
    gateway.sale_error = PaymentGatewayError('Payment declined')
    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': [{'price': 10}]},
                           headers=auth_headers(user))
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Payment declined'
    assert Order.query.count() == 0


@pytest.mark.parametrize('cart', [
    [{'_id': 'abc', 'price': 10}],
    [{'_id': 999, 'price': 10}],
])
def test_payment_rejects_invalid_cart_before_charging(client, user, auth_headers, gateway, cart):
    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': cart},
                           headers=auth_headers(user))
    assert response.status_code == 500
    assert response.get_json()['message'] == 'Invalid cart'
    assert gateway.sales == []
    assert gateway.voided == []
    assert Order.query.count() == 0


def test_payment_unexpected_error_still_responds(client, user, auth_headers, gateway):
    gateway.sale_error = RuntimeError('Unexpected error')
    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': [{'price': 10}]},
                           headers=auth_headers(user))
    assert response.status_code == 500
    assert Order.query.count() == 0


def test_payment_voids_transaction_when_order_cannot_be_saved(client, user, auth_headers, gateway,
                                                              monkeypatch, db_error):
    headers = auth_headers(user)
    monkeypatch.setattr(db.session, 'commit', db_error)
    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': [{'price': 10}]},
                           headers=headers)
    assert response.status_code == 500
    assert gateway.voided == ['txn123']


def test_payment_requires_sign_in(client, gateway):
    response = client.post('/api/v1/product/braintree/payment', json={'nonce': 'nonce', 'cart': []})
    assert response.status_code == 401
    assert gateway.sales == []


# Gateway adapter

@pytest.fixture
def braintree_gateway():
    adapter = BraintreeGateway('sandbox', 'merchant', 'public', 'private')
    adapter.gateway = SimpleNamespace(
        client_token=SimpleNamespace(generate=lambda: 'token-xyz'),
        transaction=SimpleNamespace()
    )
    return adapter


def test_adapter_generates_client_token(braintree_gateway):
    assert braintree_gateway.generate_client_token() == 'token-xyz'


def test_adapter_sale_success(braintree_gateway):
    calls = []
    transaction = SimpleNamespace(id='txn1', status='submitted_for_settlement', amount=Decimal('60.00'),
                                  currency_iso_code='USD')

    def sale(params):
        calls.append(params)
        return SimpleNamespace(is_success=True, transaction=transaction)

    braintree_gateway.gateway.transaction.sale = sale
    result = braintree_gateway.sale(Decimal('60'), 'nonce')

    assert calls == [{
        'amount': '60',
        'payment_method_nonce': 'nonce',
        'options': {'submit_for_settlement': True}
    }]
    assert result['success'] is True
    assert result['transaction']['id'] == 'txn1'
    assert result['transaction']['amount'] == '60.00'


def test_adapter_sale_failure_raises(braintree_gateway):
    braintree_gateway.gateway.transaction.sale = lambda params: SimpleNamespace(
        is_success=False, message='Processor Declined'
    )
    with pytest.raises(PaymentGatewayError, match='Processor Declined'):
        braintree_gateway.sale(Decimal('10'), 'nonce')


def test_get_gateway_is_built_once(app):
    first = views.get_gateway()
    assert isinstance(first, BraintreeGateway)
    assert views.get_gateway() is first
