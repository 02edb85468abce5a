# ecommerce/orders/views.py
from decimal import Decimal
import braintree
from braintree.exceptions.braintree_error import BraintreeError
from flask import current_app

ENVIRONMENTS = {
    'sandbox': braintree.Environment.Sandbox,
    'production': braintree.Environment.Production,
}


class PaymentGatewayError(Exception):
    """Raised when the payment provider rejects or fails a request."""


class BraintreeGateway:
    """Thin adapter over the Braintree SDK.

    Every call either returns a plain value or raises ``PaymentGatewayError``,
    so handlers never inspect SDK result objects themselves.
    """

    def __init__(self, environment, merchant_id, public_key, private_key):
        self.gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment=ENVIRONMENTS.get(environment, braintree.Environment.Sandbox),
                merchant_id=merchant_id,
                public_key=public_key,
                private_key=private_key
            )
        )

    def generate_client_token(self):
        try:
            return self.gateway.client_token.generate()
        except BraintreeError as e:
            raise PaymentGatewayError(f"Client token generation failed: {e!r}") from e

    def sale(self, amount, nonce):
        try:
            result = self.gateway.transaction.sale({
                'amount': str(amount),
                'payment_method_nonce': nonce,
                'options': {'submit_for_settlement': True}
            })
        except BraintreeError as e:
            raise PaymentGatewayError(f"Transaction failed: {e!r}") from e

        if not result.is_success:
            raise PaymentGatewayError(result.message)

        transaction = result.transaction
        return {
            'success': True,
            'transaction': {
                'id': transaction.id,
                'status': transaction.status,
                'amount': str(transaction.amount),
                'currencyIsoCode': transaction.currency_iso_code
            }
        }

    def void(self, transaction_id):
        try:
            result = self.gateway.transaction.void(transaction_id)
        except BraintreeError as e:
            raise PaymentGatewayError(f"Void failed: {e!r}") from e
        if not result.is_success:
            raise PaymentGatewayError(result.message)


def get_gateway():
    gateway = current_app.extensions.get('braintree')
    if gateway is None:
        gateway = BraintreeGateway(
            current_app.config['BRAINTREE_ENVIRONMENT'],
            current_app.config['BRAINTREE_MERCHANT_ID'],
            current_app.config['BRAINTREE_PUBLIC_KEY'],
            current_app.config['BRAINTREE_PRIVATE_KEY']
        )
        current_app.extensions['braintree'] = gateway
    return gateway

def cart_total(cart):
    return sum((Decimal(str(item.get('price', 0))) for item in cart), Decimal('0'))

def cart_product_ids(cart):
    # An order references each distinct product once
    product_ids = []
    for item in cart:
        product_id = item.get('_id')
        if product_id is not None and int(product_id) not in product_ids:
            product_ids.append(int(product_id))
    return product_ids
