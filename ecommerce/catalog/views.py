# ecommerce/catalog/views.py
import re
import unicodedata
from io import BytesIO
from uuid import uuid4
from flask import send_file

PRODUCT_FIELDS = (
    ('name', 'Name is Required'),
    ('description', 'Description is Required'),
    ('price', 'Price is Required'),
    ('category', 'Category is Required'),
    ('quantity', 'Quantity is Required'),
)

PHOTO_SIZE_MESSAGE = 'photo is Required and should be less then 1mb'

TRUTHY = {'1', 'true', 'yes', 'on'}


def slugify(value):
    normalized = unicodedata.normalize('NFKD', (value or '').strip())
    ascii_value = normalized.encode('ascii', 'ignore').decode('ascii').lower()
    slug = re.sub(r'[^a-z0-9]+', '-', ascii_value).strip('-')
    if not slug:
        slug = uuid4().hex
    return slug

def read_photo(photo):
    """Return ``(bytes, content_type)`` for an uploaded file, or ``(None, None)``."""
    if photo is None or not photo.filename:
        return None, None
    return photo.read(), photo.mimetype

def validate_product(form, photo_data, max_photo_size):
    """Return the first validation message for a product payload, or None."""
    for field, message in PRODUCT_FIELDS:
        if not form.get(field):
            return message
    if photo_data is not None and len(photo_data) > max_photo_size:
        return PHOTO_SIZE_MESSAGE
    return None

def parse_shipping(value):
    if isinstance(value, bool):
        return value
    return str(value or '').strip().lower() in TRUTHY

def send_photo(product):
    output = BytesIO(product.photo_data)
    output.seek(0)
    return send_file(output, mimetype=product.photo_content_type or 'application/octet-stream')
