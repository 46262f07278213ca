"""
In-memory crew and product registries.
"""

from __future__ import annotations

import copy
from typing import Iterable, List, Optional

from bonded_store_app.config.constants import CIGARETTES_CATEGORY
from bonded_store_app.models import CrewMember, Currency, Product
from bonded_store_app.services.errors import CrewValidationError, ProductValidationError
from bonded_store_app.utils.ids import new_id
from bonded_store_app.utils.sorting import get_crew_sort_key, get_product_sort_key, get_roster_sort_key, name_sort_key


class CrewRegistry:
    def __init__(self, crew: Iterable[CrewMember] | None = None) -> None:
        self._crew: List[CrewMember] = list(crew or [])

    def list_all(self) -> List[CrewMember]:
        return list(self._crew)

    def list_sorted(self) -> List[CrewMember]:
        """Active first, then rank order, then name."""
        return sorted(self._crew, key=get_crew_sort_key)

    def list_active(self) -> List[CrewMember]:
        """Active crew by rank then name (distribution and order sheet)."""
        return sorted((c for c in self._crew if c.is_active), key=get_roster_sort_key)

    def get(self, crew_id: str) -> Optional[CrewMember]:
        return next((c for c in self._crew if c.id == crew_id), None)

    def save(self, member: CrewMember) -> CrewMember:
        if not member.name.strip():
            raise CrewValidationError("Crew member name is required.")
        if not member.rank.strip():
            raise CrewValidationError("Crew member rank is required.")
        if member.currency not in (Currency.EUR, Currency.USD):
            raise CrewValidationError("Crew salary currency must be EUR or USD.")
        saved = copy.copy(member)
        if not saved.id:
            saved.id = new_id()
            self._crew = [*self._crew, saved]
        elif self.get(saved.id) is None:
            raise CrewValidationError(f"Crew member with id {saved.id} not found.")
        else:
            self._crew = [saved if c.id == saved.id else c for c in self._crew]
        return saved

    def delete(self, crew_id: str) -> None:
        self._crew = [c for c in self._crew if c.id != crew_id]

    def purge_inactive(self) -> List[CrewMember]:
        """Drop signed-off members; returns the removed ones."""
        removed = [c for c in self._crew if not c.is_active]
        self._crew = [c for c in self._crew if c.is_active]
        return removed


class ProductCatalog:
    def __init__(self, products: Iterable[Product] | None = None) -> None:
        self._products: List[Product] = list(products or [])

    def list_all(self) -> List[Product]:
        return list(self._products)

    def list_sorted(self) -> List[Product]:
        """Category order, then name."""
        return sorted(self._products, key=get_product_sort_key)

    def list_by_name(self) -> List[Product]:
        return sorted(self._products, key=lambda p: name_sort_key(p.name))

    def in_category(self, category: str) -> List[Product]:
        return [p for p in self._products if p.category == category]

    def cigarettes(self) -> List[Product]:
        return self.in_category(CIGARETTES_CATEGORY)

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def save(self, product: Product) -> Product:
        if not product.name.strip():
            raise ProductValidationError("Product name is required.")
        if product.pack_size < 1:
            raise ProductValidationError("Pack size must be at least 1.")
        if product.price < 0:
            raise ProductValidationError("Price cannot be negative.")
        saved = copy.copy(product)
        if not saved.unit_type.strip():
            saved.unit_type = "pcs"
        if not saved.id:
            saved.id = new_id()
            self._products = [*self._products, saved]
        elif self.get(saved.id) is None:
            raise ProductValidationError(f"Product with id {saved.id} not found.")
        else:
            self._products = [saved if p.id == saved.id else p for p in self._products]
        return saved

    def delete(self, product_id: str) -> None:
        self._products = [p for p in self._products if p.id != product_id]
