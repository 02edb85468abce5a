# ecommerce/app_factory.py
from flask import Flask, jsonify
from sqlalchemy.exc import OperationalError
from ecommerce.init_db import db, jwt
from ecommerce.authentication.views import create_admin_users

def create_app(config_class='ecommerce.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    jwt.init_app(app)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'message': 'Resource not found.'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'message': 'Method not allowed.'}), 405

    # Import and register blueprints
    from ecommerce.authentication.routes import auth_bp as auth_blueprint
    app.register_blueprint(auth_blueprint, url_prefix='/api/v1/auth')

    from ecommerce.orders.routes import orders_bp as orders_blueprint
    app.register_blueprint(orders_blueprint, url_prefix='/api/v1/auth')

    from ecommerce.catalog.routes import category_bp as category_blueprint
    app.register_blueprint(category_blueprint, url_prefix='/api/v1/category')

    from ecommerce.catalog.routes import product_bp as product_blueprint
    app.register_blueprint(product_blueprint, url_prefix='/api/v1/product')

    from ecommerce.orders.routes import payment_bp as payment_blueprint
    app.register_blueprint(payment_blueprint, url_prefix='/api/v1/product/braintree')

    with app.app_context():
        try:
            db.create_all()
            create_admin_users(app.config.get('ADMIN_USERS_FILE'))
        except OperationalError as e:
            app.logger.error(f"OperationalError during database initialization: {e}")

    return app
