"""Repository for the CartItem aggregate."""

from storefront.cart.cart_item import CartItem
from storefront.domain import storefront
from storefront.utils.queries import fetch_all


@storefront.repository(part_of=CartItem)
class CartItemRepository:
    def for_user(self, user_id) -> list[CartItem]:
        """The user's cart lines, oldest first."""
        items = fetch_all(self._dao.query.filter(user_id=user_id), "cart items")
        return sorted(items, key=lambda item: item.id)

    def find_line(self, user_id, product_id) -> CartItem | None:
        return self._dao.query.filter(user_id=user_id, product_id=product_id).all().first

    def find_owned(self, item_id, user_id) -> CartItem | None:
        """The cart line ``item_id`` if it belongs to ``user_id``, else None."""
        return self._dao.query.filter(id=item_id, user_id=user_id).all().first

    def remove(self, item: CartItem) -> None:
        self._dao.delete(item)

    def clear(self, user_id) -> int:
        """Delete every cart line of ``user_id``; returns how many were removed."""
        items = self.for_user(user_id)
        for item in items:
            self._dao.delete(item)
        return len(items)
