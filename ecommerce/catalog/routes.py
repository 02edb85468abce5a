# ecommerce/catalog/routes.py
from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import or_
from ecommerce.init_db import db
from ecommerce.logging_config import setup_logging
from ecommerce.decorators import require_sign_in, admin_required
from ecommerce.catalog.models import Category, Product
from ecommerce.catalog.views import slugify, read_photo, validate_product, parse_shipping, send_photo


category_bp = Blueprint('category', __name__)
product_bp = Blueprint('product', __name__)

logger = setup_logging()


# Categories

@category_bp.route('/create-category', methods=['POST'])
@require_sign_in
@admin_required
def create_category():
    data = request.get_json(silent=True) or {}
    name = data.get('name')

    if not name:
        return jsonify({'message': 'Name is required'}), 401

    try:
        if Category.query.filter_by(name=name).first():
            return jsonify({'success': False, 'message': 'Category Already Exists'}), 200

        category = Category(name=name, slug=slugify(name))
        db.session.add(category)
        db.session.commit()

        logger.info(f"Category '{name}' created.")
        return jsonify({'success': True, 'message': 'New category created', 'category': category.to_dict()}), 201

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating category: {e}")
        return jsonify({'success': False, 'message': 'Error in Category', 'error': str(e)}), 500

@category_bp.route('/update-category/<int:category_id>', methods=['PUT'])
@require_sign_in
@admin_required
def update_category(category_id):
    data = request.get_json(silent=True) or {}
    name = data.get('name')

    if not name:
        return jsonify({'message': 'Name is required'}), 401

    try:
        category = db.session.get(Category, category_id)
        if category is None:
            return jsonify({'success': False, 'message': 'Category not found'}), 404

        category.name = name
        category.slug = slugify(name)
        db.session.commit()

        return jsonify({'success': True, 'message': 'Category Updated Successfully', 'category': category.to_dict()}), 200

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating category {category_id}: {e}")
        return jsonify({'success': False, 'message': 'Error while updating category', 'error': str(e)}), 500

@category_bp.route('/get-category', methods=['GET'])
def list_categories():
    try:
        categories = Category.query.order_by(Category.name).all()
        return jsonify({
            'success': True,
            'message': 'All Categories List',
            'category': [category.to_dict() for category in categories]
        }), 200

    except Exception as e:
        logger.error(f"Error listing categories: {e}")
        return jsonify({'success': False, 'message': 'Error while getting all categories', 'error': str(e)}), 500

@category_bp.route('/single-category/<slug>', methods=['GET'])
def single_category(slug):
    try:
        category = Category.query.filter_by(slug=slug).first()
        return jsonify({
            'success': True,
            'message': 'Get Single Category Successfully',
            'category': category.to_dict() if category else None
        }), 200

    except Exception as e:
        logger.error(f"Error getting category {slug}: {e}")
        return jsonify({'success': False, 'message': 'Error While getting Single Category', 'error': str(e)}), 500

@category_bp.route('/delete-category/<int:category_id>', methods=['DELETE'])
@require_sign_in
@admin_required
def delete_category(category_id):
    try:
        category = db.session.get(Category, category_id)
        if category is not None and category.products:
            return jsonify({'success': False, 'message': 'Category still has products'}), 409
        if category is not None:
            db.session.delete(category)
            db.session.commit()

        return jsonify({'success': True, 'message': 'Category Deleted Successfully'}), 200

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting category {category_id}: {e}")
        return jsonify({'success': False, 'message': 'Error while deleting category', 'error': str(e)}), 500


# Products

def _apply_product_form(product, form, photo_data, photo_content_type):
    category = db.session.get(Category, int(form.get('category')))
    if category is None:
        raise LookupError(f"Category {form.get('category')} not found")

    product.name = form.get('name')
    product.slug = slugify(form.get('name'))
    product.description = form.get('description')
    product.price = float(form.get('price'))
    product.category = category
    product.quantity = int(form.get('quantity'))
    product.shipping = parse_shipping(form.get('shipping'))
    if photo_data is not None:
        product.photo_data = photo_data
        product.photo_content_type = photo_content_type

@product_bp.route('/create-product', methods=['POST'])
@require_sign_in
@admin_required
def create_product():
    photo_data, photo_content_type = read_photo(request.files.get('photo'))
    error = validate_product(request.form, photo_data, current_app.config['MAX_PHOTO_SIZE'])
    if error:
        logger.warning(f"Product creation rejected: {error}")
        return jsonify({'error': error}), 500

    try:
        product = Product()
        _apply_product_form(product, request.form, photo_data, photo_content_type)
        db.session.add(product)
        db.session.commit()

        logger.info(f"Product '{product.name}' created.")
        return jsonify({
            'success': True,
            'message': 'Product Created Successfully',
            'products': product.to_dict()
        }), 201

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating product: {e}")
        return jsonify({'success': False, 'message': 'Error in creating product', 'error': str(e)}), 500

@product_bp.route('/update-product/<int:pid>', methods=['PUT'])
@require_sign_in
@admin_required
def update_product(pid):
    photo_data, photo_content_type = read_photo(request.files.get('photo'))
    error = validate_product(request.form, photo_data, current_app.config['MAX_PHOTO_SIZE'])
    if error:
        logger.warning(f"Product update rejected: {error}")
        return jsonify({'error': error}), 500

    try:
        product = db.session.get(Product, pid)
        if product is None:
            raise LookupError(f"Product {pid} not found")

        _apply_product_form(product, request.form, photo_data, photo_content_type)
        db.session.commit()

        logger.info(f"Product {pid} updated.")
        return jsonify({
            'success': True,
            'message': 'Product Updated Successfully',
            'products': product.to_dict()
        }), 201

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating product {pid}: {e}")
        return jsonify({'success': False, 'message': 'Error in Update product', 'error': str(e)}), 500

@product_bp.route('/get-product', methods=['GET'])
def list_products():
    try:
        products = Product.query.order_by(Product.created_at.desc(), Product.id.desc()).limit(12).all()
        return jsonify({
            'success': True,
            'countTotal': len(products),
            'message': 'All Products',
            'products': [product.to_dict() for product in products]
        }), 200

    except Exception as e:
        logger.error(f"Error getting products: {e}")
        return jsonify({'success': False, 'message': 'Error in getting products', 'error': str(e)}), 500

@product_bp.route('/get-product/<slug>', methods=['GET'])
def single_product(slug):
    try:
        product = Product.query.filter_by(slug=slug).first()
        return jsonify({
            'success': True,
            'message': 'Single Product Fetched',
            'product': product.to_dict() if product else None
        }), 200

    except Exception as e:
        logger.error(f"Error getting product {slug}: {e}")
        return jsonify({'success': False, 'message': 'Error while getting single product', 'error': str(e)}), 500

@product_bp.route('/product-photo/<int:pid>', methods=['GET'])
def product_photo(pid):
    try:
        product = db.session.get(Product, pid)
        if product is None or not product.photo_data:
            return jsonify({'success': False, 'message': 'Photo not found'}), 404

        return send_photo(product)

    except Exception as e:
        logger.error(f"Error getting photo for product {pid}: {e}")
        return jsonify({'success': False, 'message': 'Error while getting photo', 'error': str(e)}), 500

@product_bp.route('/delete-product/<int:pid>', methods=['DELETE'])
@require_sign_in
@admin_required
def delete_product(pid):
    try:
        product = db.session.get(Product, pid)
        if product is not None:
            db.session.delete(product)
            db.session.commit()

        logger.info(f"Product {pid} deleted.")
        return jsonify({'success': True, 'message': 'Product Deleted successfully'}), 200

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting product {pid}: {e}")
        return jsonify({'success': False, 'message': 'Error while deleting product', 'error': str(e)}), 500

@product_bp.route('/product-filters', methods=['POST'])
def filter_products():
    data = request.get_json(silent=True) or {}
    checked = data.get('checked') or []
    radio = data.get('radio') or []

    try:
        query = Product.query
        if checked:
            query = query.filter(Product.category_id.in_([int(category_id) for category_id in checked]))
        if len(radio) == 2:
            query = query.filter(Product.price >= float(radio[0]), Product.price <= float(radio[1]))

        products = query.all()
        return jsonify({'success': True, 'products': [product.to_dict() for product in products]}), 200

    except Exception as e:
        logger.error(f"Error filtering products: {e}")
        return jsonify({'success': False, 'message': 'Error While Filtering Products', 'error': str(e)}), 400

@product_bp.route('/product-count', methods=['GET'])
def count_products():
    try:
        total = Product.query.count()
        return jsonify({'success': True, 'total': total}), 200

    except Exception as e:
        logger.error(f"Error counting products: {e}")
        return jsonify({'success': False, 'message': 'Error in product count', 'error': str(e)}), 400

@product_bp.route('/product-list/<int:page>', methods=['GET'])
def paginate_products(page):
    per_page = current_app.config['PRODUCTS_PER_PAGE']
    page = max(page, 1)

    try:
        products = (
            Product.query
            .order_by(Product.created_at.desc(), Product.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return jsonify({'success': True, 'products': [product.to_dict() for product in products]}), 200

    except Exception as e:
        logger.error(f"Error listing products page {page}: {e}")
        return jsonify({'success': False, 'message': 'Error in per page ctrl', 'error': str(e)}), 400

@product_bp.route('/search/<keyword>', methods=['GET'])
def search_products(keyword):
    try:
        pattern = f'%{keyword}%'
        products = Product.query.filter(
            or_(Product.name.ilike(pattern), Product.description.ilike(pattern))
        ).all()
        return jsonify([product.to_dict(populate_category=False) for product in products]), 200

    except Exception as e:
        logger.error(f"Error searching products for '{keyword}': {e}")
        return jsonify({'success': False, 'message': 'Error In Search Product API', 'error': str(e)}), 400

@product_bp.route('/related-product/<int:pid>/<int:cid>', methods=['GET'])
def related_products(pid, cid):
    try:
        products = (
            Product.query
            .filter(Product.category_id == cid, Product.id != pid)
            .limit(3)
            .all()
        )
        return jsonify({'success': True, 'products': [product.to_dict() for product in products]}), 200

    except Exception as e:
        logger.error(f"Error getting products related to {pid}: {e}")
        return jsonify({'success': False, 'message': 'Error while getting related product', 'error': str(e)}), 400

@product_bp.route('/product-category/<slug>', methods=['GET'])
def products_by_category(slug):
    try:
        category = Category.query.filter_by(slug=slug).first()
        products = Product.query.filter_by(category_id=category.id).all() if category else []
        return jsonify({
            'success': True,
            'category': category.to_dict() if category else None,
            'products': [product.to_dict() for product in products]
        }), 200

    except Exception as e:
        logger.error(f"Error getting products for category {slug}: {e}")
        return jsonify({'success': False, 'message': 'Error While Getting products', 'error': str(e)}), 400
