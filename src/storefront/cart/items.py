"""Cart item management — commands and handler.

Every cart mutation is scoped to the owning user: a line id that belongs to
somebody else behaves exactly like an unknown id.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="CartItem")
class AddToCart:
    user_id: Integer(required=True)
    product_id: Integer(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class UpdateCartItem:
    user_id: Integer(required=True)
    item_id: Integer(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class RemoveFromCart:
    user_id: Integer(required=True)
    item_id: Integer(required=True)


@storefront.command(part_of="CartItem")
class ClearCart:
    user_id: Integer(required=True)


@storefront.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        if current_domain.repository_for(Product).find(command.product_id) is None:
            raise ValidationError({"product_id": [f"Product {command.product_id} not found"]})

        repo = current_domain.repository_for(CartItem)
        item = repo.find_line(command.user_id, command.product_id)
        if item is None:
            item = CartItem.create(command.user_id, command.product_id, command.quantity)
        else:
            item.increase(command.quantity)
        repo.add(item)

        logger.info(
            "cart_item_added",
            user_id=command.user_id,
            product_id=command.product_id,
            quantity=item.quantity,
        )
        return item.id

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.find_owned(command.item_id, command.user_id)
        if item is None:
            raise ValidationError({"cart_item": ["Cart item not found"]})

        item.set_quantity(command.quantity)
        repo.add(item)
        return item.id

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.find_owned(command.item_id, command.user_id)
        if item is None:
            return
        repo.remove(item)
        logger.info("cart_item_removed", user_id=command.user_id, item_id=command.item_id)

    @handle(ClearCart)
    def clear_cart(self, command):
        removed = current_domain.repository_for(CartItem).clear(command.user_id)
        logger.info("cart_cleared", user_id=command.user_id, removed=removed)
