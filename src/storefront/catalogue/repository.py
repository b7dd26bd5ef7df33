"""Repositories for the catalogue aggregates."""

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=Product)
class ProductRepository:
    def find(self, product_id) -> Product | None:
        """Like ``get()``, but returns None when the product does not exist."""
        return self._dao.query.filter(id=product_id).all().first

    def all_products(self) -> list[Product]:
        return sorted(fetch_all(self._dao.query, "products"), key=lambda product: product.id)

    def search(self, category_id=None, search=None) -> list[Product]:
        """Products filtered by exact category and/or a free-text term.

        Both filters apply together. The term matches name, description or
        tags case-insensitively. Results are in creation order.
        """
        query = self._dao.query
        if category_id is not None:
            query = query.filter(category_id=category_id)
        products = sorted(fetch_all(query, "products"), key=lambda product: product.id)

        if search:
            products = [product for product in products if product.matches(search)]
        return products

    def featured(self) -> list[Product]:
        products = fetch_all(self._dao.query.filter(featured=True), "products")
        return sorted(products, key=lambda product: product.id)


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find(self, category_id) -> Category | None:
        return self._dao.query.filter(id=category_id).all().first

    def all_categories(self) -> list[Category]:
        return sorted(fetch_all(self._dao.query, "categories"), key=lambda category: category.id)
