"""Product aggregate — an item for sale in the catalogue."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import format_amount, is_amount
from storefront.utils.sequence import next_id, reserve


@storefront.aggregate
class Product:
    """A sellable product.

    ``price`` and ``original_price`` are two-place decimal strings. A product
    with an ``original_price`` is displayed as discounted. ``tags`` holds a
    JSON list of strings; use ``tag_names()`` to read it.
    """

    id: Integer(identifier=True)
    name: String(required=True, max_length=255, sanitize=False)
    description: Text(sanitize=False)
    price: String(required=True, max_length=20)
    original_price: String(max_length=20)
    image_url: String(max_length=500, sanitize=False)
    category_id: Integer()
    stock: Integer(default=0, min_value=0)
    featured: Boolean(default=False)
    rating: String(max_length=10, default="0")
    review_count: Integer(default=0, min_value=0)
    tags: Text(sanitize=False)
    created_at: DateTime()

    @invariant.post
    def prices_must_be_amounts(self):
        if not is_amount(self.price):
            raise ValidationError({"price": [f"Invalid price: {self.price!r}"]})
        if self.original_price is not None and not is_amount(self.original_price):
            raise ValidationError({"original_price": [f"Invalid original price: {self.original_price!r}"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        original_price=None,
        image_url=None,
        category_id=None,
        stock=0,
        featured=False,
        rating="0",
        review_count=0,
        tags=None,
        product_id=None,
    ):
        if product_id is None:
            product_id = next_id("products")
        else:
            reserve("products", product_id)

        return cls(
            id=product_id,
            name=name,
            description=description,
            price=price,
            original_price=original_price,
            image_url=image_url,
            category_id=category_id,
            stock=stock,
            featured=featured,
            rating=rating,
            review_count=review_count,
            tags=json.dumps(list(tags)) if tags else None,
            created_at=datetime.now(UTC),
        )

    def tag_names(self) -> list[str]:
        if not self.tags:
            return []
        return json.loads(self.tags)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name, description or any tag."""
        needle = term.lower()
        if needle in self.name.lower():
            return True
        if self.description and needle in self.description.lower():
            return True
        return any(needle in tag.lower() for tag in self.tag_names())

    def change_price(self, price):
        if not is_amount(price):
            raise ValidationError({"price": [f"Invalid price: {price!r}"]})
        self.price = format_amount(price)
