"""Catalogue maintenance — commands and handlers for categories and products."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Category")
class CreateCategory:
    category_id: Integer()
    name: String(required=True, max_length=100, sanitize=False)
    slug: String(required=True, max_length=100)


@storefront.command(part_of="Product")
class CreateProduct:
    product_id: Integer()
    name: String(required=True, max_length=255, sanitize=False)
    description: Text(sanitize=False)
    price: String(required=True, max_length=20)
    original_price: String(max_length=20)
    image_url: String(max_length=500, sanitize=False)
    category_id: Integer()
    stock: Integer(default=0)
    featured: Boolean(default=False)
    rating: String(max_length=10, default="0")
    review_count: Integer(default=0)
    tags: Text(sanitize=False)  # JSON list of strings


@storefront.command(part_of="Product")
class UpdateProductPrice:
    product_id: Integer(required=True)
    price: String(required=True, max_length=20)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Integer(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name, slug=command.slug, category_id=command.category_id)
        current_domain.repository_for(Category).add(category)
        return category.id


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category_id = command.category_id
        if category_id is not None and current_domain.repository_for(Category).find(category_id) is None:
            raise ValidationError({"category_id": [f"Category {category_id} not found"]})

        product = Product.create(
            product_id=command.product_id,
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            image_url=command.image_url,
            category_id=command.category_id,
            stock=command.stock,
            featured=command.featured,
            rating=command.rating,
            review_count=command.review_count,
            tags=json.loads(command.tags) if command.tags else None,
        )
        current_domain.repository_for(Product).add(product)
        return product.id

    @handle(UpdateProductPrice)
    def update_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        previous_price = product.price
        product.change_price(command.price)
        repo.add(product)
        logger.info(
            "product_price_changed",
            product_id=product.id,
            previous_price=previous_price,
            price=product.price,
        )

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_removed", product_id=product.id)
