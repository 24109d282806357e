from .customers import Customer
from .products import Product
from .invoices import Invoice
from .sales import Sale

__all__ = [
    'Customer',
    'Product',
    'Invoice',
    'Sale',
]
