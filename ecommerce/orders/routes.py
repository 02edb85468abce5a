# ecommerce/orders/routes.py
from flask import Blueprint, g, jsonify, request
from ecommerce.init_db import db
from ecommerce.logging_config import setup_logging
from ecommerce.decorators import require_sign_in, admin_required
from ecommerce.catalog.models import Product
from ecommerce.orders.models import Order, ORDER_STATUSES
from ecommerce.orders.views import PaymentGatewayError, get_gateway, cart_total, cart_product_ids


orders_bp = Blueprint('orders', __name__)
payment_bp = Blueprint('payment', __name__)

logger = setup_logging()


@orders_bp.route('/orders', methods=['GET'])
@require_sign_in
def get_orders():
    try:
        orders = Order.query.filter_by(buyer_id=g.user['_id']).order_by(Order.created_at.desc()).all()
        return jsonify([order.to_dict() for order in orders]), 200

    except Exception as e:
        logger.error(f"Error getting orders for user {g.user['_id']}: {e}")
        return jsonify({'success': False, 'message': 'Error While Getting Orders', 'error': str(e)}), 500

@orders_bp.route('/all-orders', methods=['GET'])
@require_sign_in
@admin_required
def get_all_orders():
    try:
        orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
        return jsonify([order.to_dict() for order in orders]), 200

    except Exception as e:
        logger.error(f"Error getting all orders: {e}")
        return jsonify({'success': False, 'message': 'Error While Getting Orders', 'error': str(e)}), 500

@orders_bp.route('/order-status/<int:order_id>', methods=['PUT'])
@require_sign_in
@admin_required
def update_order_status(order_id):
    data = request.get_json(silent=True) or {}
    status = data.get('status')

    try:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status: {status}")

        order = db.session.get(Order, order_id)
        if order is None:
            return jsonify(None), 200

        order.status = status
        db.session.commit()

        logger.info(f"Order {order_id} moved to '{status}'.")
        return jsonify(order.to_dict()), 200

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating order {order_id}: {e}")
        return jsonify({'success': False, 'message': 'Error While Updating Order', 'error': str(e)}), 500


@payment_bp.route('/token', methods=['GET'])
@require_sign_in
def payment_token():
    try:
        client_token = get_gateway().generate_client_token()
        return jsonify({'clientToken': client_token}), 200

    except PaymentGatewayError as e:
        logger.error(f"Payment gateway error while generating token: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
    except Exception as e:
        logger.error(f"Unexpected error while generating payment token: {e}")
        return jsonify({'success': False, 'message': 'Error in payment token', 'error': str(e)}), 500

@payment_bp.route('/payment', methods=['POST'])
@require_sign_in
def payment():
    data = request.get_json(silent=True) or {}
    nonce = data.get('nonce')
    cart = data.get('cart') or []

    try:
        product_ids = cart_product_ids(cart)
        products = Product.query.filter(Product.id.in_(product_ids)).all() if product_ids else []
        missing = set(product_ids) - {product.id for product in products}
        if missing:
            raise LookupError(f"Unknown products in cart: {sorted(missing)}")
    except Exception as e:
        logger.warning(f"Rejected cart for user {g.user['_id']}: {e}")
        return jsonify({'success': False, 'message': 'Invalid cart', 'error': str(e)}), 500

    try:
        gateway = get_gateway()
        amount = cart_total(cart)
        result = gateway.sale(amount, nonce)
    except PaymentGatewayError as e:
        logger.error(f"Payment declined for user {g.user['_id']}: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500
    except Exception as e:
        logger.error(f"Unexpected error during payment: {e}")
        return jsonify({'success': False, 'message': 'Error in payment', 'error': str(e)}), 500

    try:
        order = Order(products=products, payment=result, buyer_id=g.user['_id'])
        db.session.add(order)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        transaction_id = result['transaction']['id']
        logger.error(f"Order could not be saved after transaction {transaction_id}: {e}")
        # The charge went through but nothing was recorded; undo it
        try:
            gateway.void(transaction_id)
            logger.info(f"Transaction {transaction_id} voided.")
        except PaymentGatewayError as void_error:
            logger.error(f"Could not void transaction {transaction_id}: {void_error}")
        return jsonify({'success': False, 'message': 'Error while saving order', 'error': str(e)}), 500

    logger.info(f"Order {order.id} placed by user {g.user['_id']} for {amount}.")
    return jsonify({'ok': True}), 200
