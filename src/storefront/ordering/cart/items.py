"""Cart mutations — commands and handler.

Adding to a cart creates it on first use. Setting, removing and clearing on
an owner without a cart are no-ops.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart


@storefront.command(part_of="Cart")
class AddToCart:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class SetCartQuantity:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    owner_id = Identifier(required=True)


def _existing_cart(repo, owner_id):
    try:
        return repo.get(owner_id)
    except ObjectNotFoundError:
        return None


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)
        if cart is None:
            cart = Cart.create(owner_id=command.owner_id)
        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)
        if cart is None:
            return
        cart.set_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)
        if cart is None:
            return
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.owner_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
