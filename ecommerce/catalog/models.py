# ecommerce/catalog/models.py
from datetime import datetime
from ecommerce.init_db import db

class Category(db.Model):
    __tablename__ = 'categories'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    slug = db.Column(db.String(120), nullable=False)

    def to_dict(self):
        return {'_id': self.id, 'name': self.name, 'slug': self.slug}

class Product(db.Model):
    __tablename__ = 'products'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(220), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Float, nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False)
    category = db.relationship('Category', backref=db.backref('products', lazy=True))
    quantity = db.Column(db.Integer, nullable=False)
    shipping = db.Column(db.Boolean, default=False)
    photo_data = db.Column(db.LargeBinary, nullable=True)
    photo_content_type = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self, populate_category=True):
        # Photo bytes are served separately by the product-photo endpoint
        category = self.category.to_dict() if populate_category and self.category else self.category_id
        return {
            '_id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'price': self.price,
            'category': category,
            'quantity': self.quantity,
            'shipping': self.shipping,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
