"""Catalogue sync: commands the catalogue service uses to mirror listings.

Price updates relayed on behalf of a signed-in seller carry ``actor_id`` and
are held to the seller's ownership of the product.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.access.actor import resolve_actor
from ordering.access.visibility import ensure_can_mutate_product
from ordering.catalogue.product import Product
from ordering.domain import ordering


@ordering.command(part_of="Product")
class RegisterProduct:
    product_id = Identifier()
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    owner_id = Identifier(required=True)


@ordering.command(part_of="Product")
class UpdateProductPrice:
    product_id = Identifier(required=True)
    price = Float(required=True, min_value=0.0)
    actor_id = Identifier()


@ordering.command_handler(part_of=Product)
class ProductSyncHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            name=command.name,
            price=command.price,
            owner_id=command.owner_id,
            product_id=command.product_id,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProductPrice)
    def update_product_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        if command.actor_id:
            ensure_can_mutate_product(resolve_actor(command.actor_id), product)
        product.reprice(command.price)
        repo.add(product)
