# ecommerce/authentication/views.py
import json
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import NoAuthorizationError
from sqlalchemy.exc import OperationalError
from werkzeug.security import generate_password_hash, check_password_hash
from ecommerce.init_db import db
from ecommerce.authentication.models import User, ROLE_ADMIN
from ecommerce.logging_config import setup_logging

logger = setup_logging()

# Fixed work factor so every stored hash costs the same to verify
DEFAULT_HASH_METHOD = 'pbkdf2:sha256:600000'


def hash_password(password):
    """Hash a plaintext password. Returns None when hashing fails."""
    try:
        return generate_password_hash(
            password,
            method=current_app.config.get('PASSWORD_HASH_METHOD', DEFAULT_HASH_METHOD)
        )
    except Exception as e:
        logger.error(f"Error hashing password: {e}")
        return None

def compare_password(password, hashed_password):
    return check_password_hash(hashed_password, password)

def sign_token(user_id, expires_delta=None):
    """Issue a signed session token whose identity is the user id.

    ``expires_delta`` falls back to ``JWT_ACCESS_TOKEN_EXPIRES``.
    """
    return create_access_token(identity=str(user_id), expires_delta=expires_delta)

def verify_token(token):
    """Decode a session token, raising on a missing, malformed or expired one."""
    if not token:
        raise NoAuthorizationError('jwt must be provided')
    if token.startswith('Bearer '):
        token = token[len('Bearer '):]
    return decode_token(token)

def create_admin_users(json_path):
    if not json_path:
        return
    try:
        # Load admin users details from JSON file
        with open(json_path, 'r') as f:
            admin_data = json.load(f)

        for admin_details in admin_data.get('admins', []):
            admin_user = User.query.filter_by(email=admin_details['email']).first()
            if admin_user is None:
                admin_user = User(
                    name=admin_details['name'],
                    email=admin_details['email'],
                    password=hash_password(admin_details['password']),
                    phone=admin_details.get('phone', ''),
                    address=admin_details.get('address', ''),
                    answer=admin_details.get('answer', ''),
                    role=ROLE_ADMIN
                )
                db.session.add(admin_user)
                logger.info(f"Admin user '{admin_details['email']}' created successfully.")
            else:
                logger.info(f"Admin user '{admin_details['email']}' already exists.")

        db.session.commit()
    except FileNotFoundError:
        logger.warning(f"Admin user JSON file not found at {json_path}.")
    except json.JSONDecodeError:
        logger.error("Error decoding the admin user JSON file.")
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"OperationalError when creating admin users: {e}")
