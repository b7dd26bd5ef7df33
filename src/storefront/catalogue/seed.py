"""Demo catalogue loaded at application start."""

import json

from protean.utils.globals import current_domain

from storefront.catalogue.management import CreateCategory, CreateProduct
from storefront.catalogue.product import Product
from storefront.domain import logger

_IMAGE = "https://images.unsplash.com/{photo}?ixlib=rb-4.0.3&w=400&h=300&fit=crop"

CATEGORIES = [
    {"category_id": 1, "name": "Electronics", "slug": "electronics"},
    {"category_id": 2, "name": "Clothing", "slug": "clothing"},
    {"category_id": 3, "name": "Home & Garden", "slug": "home-garden"},
    {"category_id": 4, "name": "Sports", "slug": "sports"},
    {"category_id": 5, "name": "Books", "slug": "books"},
    {"category_id": 6, "name": "Beauty", "slug": "beauty"},
]

PRODUCTS = [
    {
        "product_id": 1,
        "name": "Premium Wireless Headphones",
        "description": "High-quality wireless headphones with noise cancellation",
        "price": "149.99",
        "original_price": "199.99",
        "image_url": _IMAGE.format(photo="photo-1505740420928-5e560c06d30e"),
        "category_id": 1,
        "stock": 50,
        "featured": True,
        "rating": "4.5",
        "review_count": 124,
        "tags": ["wireless", "audio", "noise-cancelling"],
    },
    {
        "product_id": 2,
        "name": "Smart Fitness Watch",
        "description": "Advanced fitness tracker with heart rate monitoring",
        "price": "299.99",
        "image_url": _IMAGE.format(photo="photo-1523275335684-37898b6baf30"),
        "category_id": 1,
        "stock": 30,
        "featured": True,
        "rating": "5.0",
        "review_count": 89,
        "tags": ["fitness", "smart", "health"],
    },
    {
        "product_id": 3,
        "name": "Urban Travel Backpack",
        "description": "Durable and stylish backpack for urban adventures",
        "price": "89.99",
        "image_url": _IMAGE.format(photo="photo-1553062407-98eeb64c6a62"),
        "category_id": 3,
        "stock": 75,
        "featured": False,
        "rating": "4.0",
        "review_count": 67,
        "tags": ["travel", "backpack", "urban"],
    },
    {
        "product_id": 4,
        "name": "Professional DSLR Camera",
        "description": "Professional camera for photography enthusiasts",
        "price": "899.99",
        "image_url": _IMAGE.format(photo="photo-1516035069371-29a1b244cc32"),
        "category_id": 1,
        "stock": 20,
        "featured": True,
        "rating": "5.0",
        "review_count": 156,
        "tags": ["camera", "photography", "professional"],
    },
    {
        "product_id": 5,
        "name": "Premium Skincare Set",
        "description": "Luxury skincare products for daily routine",
        "price": "129.99",
        "image_url": _IMAGE.format(photo="photo-1556228720-195a672e8a03"),
        "category_id": 6,
        "stock": 40,
        "featured": True,
        "rating": "4.5",
        "review_count": 203,
        "tags": ["skincare", "beauty", "premium"],
    },
    {
        "product_id": 6,
        "name": "Athletic Running Shoes",
        "description": "Comfortable running shoes for everyday wear",
        "price": "159.99",
        "image_url": _IMAGE.format(photo="photo-1542291026-7eec264c27ff"),
        "category_id": 4,
        "stock": 60,
        "featured": False,
        "rating": "5.0",
        "review_count": 312,
        "tags": ["shoes", "running", "athletic"],
    },
    {
        "product_id": 7,
        "name": "Ergonomic Office Desk",
        "description": "Modern office desk with storage solutions",
        "price": "449.99",
        "image_url": _IMAGE.format(photo="photo-1586023492125-27b2c045efd7"),
        "category_id": 3,
        "stock": 15,
        "featured": False,
        "rating": "4.0",
        "review_count": 78,
        "tags": ["desk", "office", "ergonomic"],
    },
    {
        "product_id": 8,
        "name": "Home Decor Collection",
        "description": "Beautiful home decor items for interior styling",
        "price": "79.99",
        "original_price": "99.99",
        "image_url": _IMAGE.format(photo="photo-1574375927938-d5a98e8ffe85"),
        "category_id": 3,
        "stock": 25,
        "featured": False,
        "rating": "4.5",
        "review_count": 145,
        "tags": ["decor", "home", "styling"],
    },
]


def seed_catalogue() -> None:
    """Load the demo categories and products unless the catalogue already has data.

    Must run inside a domain context.
    """
    if current_domain.repository_for(Product).find(1) is not None:
        return

    for category in CATEGORIES:
        current_domain.process(CreateCategory(**category), asynchronous=False)
    for product in PRODUCTS:
        payload = {**product, "tags": json.dumps(product["tags"])}
        current_domain.process(CreateProduct(**payload), asynchronous=False)

    logger.info("catalogue_seeded", categories=len(CATEGORIES), products=len(PRODUCTS))
