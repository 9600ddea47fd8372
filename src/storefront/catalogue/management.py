"""Product administration — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    title: String(required=True, max_length=255)
    price: Float(required=True)
    description: Text(required=True)
    category: String(required=True, max_length=100)
    image_url: String(max_length=2048)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    price: Float(required=True)
    description: Text(required=True)
    category: String(required=True, max_length=100)
    image_url: String(max_length=2048)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            title=command.title,
            price=command.price,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            title=command.title,
            price=command.price,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        # Carts keep dangling references; reads drop them, checkout skips them.
        repo._dao.delete(product)
        logger.info("Product removed", product_id=str(command.product_id))
