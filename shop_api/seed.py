from .core import ProductIn, _make_product_doc
from .log import get_logger

logger = get_logger(__name__)

SEED_PRODUCTS = [
    {"name": "Wireless Headphones", "price": 79.99, "stock": 50},
    {"name": "Smart Watch", "price": 199.99, "stock": 30},
    {"name": "Laptop Stand", "price": 49.99, "stock": 100},
    {"name": "Keyboard", "price": 129.99, "stock": 45},
    {"name": "USB Hub", "price": 39.99, "stock": 80},
    {"name": "Webcam", "price": 89.99, "stock": 25},
    {"name": "Phone Case", "price": 24.99, "stock": 150},
    {"name": "Power Bank", "price": 34.99, "stock": 60},
]


def ensure_seed_products(store) -> int:
    """Insert the starter catalog when the product collection is empty.

    Returns the number of products inserted.
    """
    count = store.count_products()
    if count:
        logger.info("catalog already populated", products=count)
        return 0
    docs = [_make_product_doc(ProductIn(**p)) for p in SEED_PRODUCTS]
    inserted = store.insert_products(docs)
    logger.info("catalog seeded", products=inserted)
    return inserted
