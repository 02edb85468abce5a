# ecommerce/decorators.py
from functools import wraps
from flask import g, jsonify, request
from ecommerce.init_db import db
from ecommerce.authentication.models import User
from ecommerce.authentication.views import verify_token
from ecommerce.logging_config import setup_logging

logger = setup_logging()


def require_sign_in(view):
    """Verify the Authorization header and expose the decoded identity as ``g.user``."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            decoded = verify_token(request.headers.get('Authorization'))
            g.user = dict(decoded, _id=int(decoded['sub']))
        except Exception as e:
            logger.warning(f"Sign in verification failed: {e}")
            return jsonify({
                'success': False,
                'error': str(e),
                'message': 'Error in sign in verification'
            }), 401
        return view(*args, **kwargs)
    return wrapper

def admin_required(view):
    """Let the request through only when the signed-in user has the admin role.

    Must be stacked below ``require_sign_in``.
    """
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            identity = g.get('user')
            if not identity:
                raise LookupError('No signed in user on the request')
            user = db.session.get(User, identity['_id'])
            if user is None:
                raise LookupError(f"User {identity['_id']} not found")
            if not user.is_admin:
                logger.warning(f"Non-admin user {user.email} attempted admin access.")
                return jsonify({'success': False, 'message': 'Unauthorized Access'}), 401
        except Exception as e:
            logger.error(f"Error in admin middleware: {e}")
            return jsonify({
                'success': False,
                'error': str(e),
                'message': 'Error in admin middleware'
            }), 401
        return view(*args, **kwargs)
    return wrapper
