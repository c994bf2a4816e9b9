"""Demo catalog for local development and tests."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from storefront.core.logging_config import logger
from storefront.domain.entities import Category, Product
from storefront.repositories import CategoryRepository, ProductRepository

CATEGORIES = [
    ("Headphones", "https://images.unsplash.com/photo-1505740420928-5e560c06d30e"),
    ("Watches", "https://images.unsplash.com/photo-1523275335684-37898b6baf30"),
    ("Cameras", "https://images.unsplash.com/photo-1516035069371-29a1b244cc32"),
    ("Accessories", "https://images.unsplash.com/photo-1491553895911-0055eca6402d"),
]

# (name, description, price, sale_price, category, rating, reviews, in_stock, featured)
PRODUCTS = [
    ("Wireless Noise-Cancelling Headphones", "Over-ear, 30h battery, USB-C fast charge",
     "249.99", "199.99", "Headphones", 4.8, 128, True, True),
    ("Sport Earbuds", "Sweat-resistant true wireless earbuds",
     "89.00", None, "Headphones", 4.3, 64, True, False),
    ("Classic Leather Watch", "Analog quartz movement, genuine leather strap",
     "159.00", "129.00", "Watches", 4.6, 41, True, False),
    ("Smart Fitness Watch", "Heart-rate and sleep tracking, GPS",
     "199.00", None, "Watches", 4.4, 97, False, False),
    ("Mirrorless Camera Kit", "24MP sensor with 15-45mm lens",
     "749.00", "699.00", "Cameras", 4.7, 23, True, False),
    ("Instant Film Camera", "Prints credit-card sized photos in seconds",
     "69.99", None, "Cameras", 4.1, 210, True, False),
    ("Canvas Backpack", "Water-resistant, padded 15\" laptop sleeve",
     "59.00", "45.00", "Accessories", 4.5, 76, True, False),
    ("Braided USB-C Cable", "2m, 100W charging",
     "19.00", None, "Accessories", 4.2, 305, True, False),
]


def seed_catalog(session_factory: sessionmaker) -> int:
    """Insert the demo catalog when the products table is empty.

    Returns:
        Number of products inserted (0 when the catalog already has data)
    """
    products = ProductRepository(session_factory)
    categories = CategoryRepository(session_factory)

    if products.count_products():
        logger.info("Catalog already populated, skipping seed")
        return 0

    for name, image_url in CATEGORIES:
        if categories.get_by_name(name) is None:
            categories.add_category(Category(name=name, image_url=image_url))

    images = dict(CATEGORIES)
    for name, description, price, sale_price, category, rating, reviews, in_stock, featured in PRODUCTS:
        products.add_product(
            Product(
                name=name,
                description=description,
                price=Decimal(price),
                sale_price=Decimal(sale_price) if sale_price else None,
                image_url=images[category],
                category=category,
                rating=rating,
                reviews=reviews,
                in_stock=in_stock,
                featured=featured,
            )
        )

    logger.info("Seeded %s products in %s categories", len(PRODUCTS), len(CATEGORIES))
    return len(PRODUCTS)
