# ecommerce/orders/models.py
from datetime import datetime
from ecommerce.init_db import db

ORDER_STATUSES = ('Not Process', 'Processing', 'Shipped', 'Delivered', 'Cancelled')

order_products = db.Table(
    'order_products',
    db.Column('order_id', db.Integer, db.ForeignKey('orders.id'), primary_key=True),
    db.Column('product_id', db.Integer, db.ForeignKey('products.id'), primary_key=True),
)

class Order(db.Model):
    __tablename__ = 'orders'
    id = db.Column(db.Integer, primary_key=True)
    products = db.relationship('Product', secondary=order_products, backref=db.backref('orders', lazy=True))
    buyer_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    buyer = db.relationship('User', backref=db.backref('orders', lazy=True))
    payment = db.Column(db.JSON, nullable=True)
    status = db.Column(db.String(20), default='Not Process', nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """Order with products (photo excluded) and only the buyer's name populated."""
        return {
            '_id': self.id,
            'products': [product.to_dict(populate_category=False) for product in self.products],
            'buyer': {'_id': self.buyer.id, 'name': self.buyer.name} if self.buyer else None,
            'payment': self.payment,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
