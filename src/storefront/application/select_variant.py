"""Application service: Select Variant use case (query).

Resolves a size/color choice on the product page to a concrete variant
and its price.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.catalog import ProductVariant, find_variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import ProductVariantRepository


@dataclass(frozen=True)
class VariantChoice:
    variant: ProductVariant
    unit_price: Money


class SelectVariantHandler:

    def __init__(self, variant_repo: ProductVariantRepository) -> None:
        self._variant_repo = variant_repo

    def handle(
        self,
        product_id: str,
        base_price: Money,
        size: str | None = None,
        color: str | None = None,
    ) -> VariantChoice:
        variants = self._variant_repo.list_for_product(product_id)
        variant = find_variant(variants, size, color)
        if variant is None:
            raise EntityNotFoundError("No variant matches this selection")
        if not variant.is_selectable:
            raise ValidationError("This option is out of stock")
        return VariantChoice(variant=variant, unit_price=variant.unit_price(base_price))
