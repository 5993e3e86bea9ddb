from typing import Any, Callable, Dict, List, Optional

from infrastructure.backend.errors import DataApiError
from use_cases.domain_models import Product

PRODUCT_WITH_BAKER = "*, baker:profiles(id, full_name, phone)"


class ProductRepository:
    def __init__(self, client, token_provider: Callable[[], Optional[str]]):
        self.client = client
        self._token = token_provider

    def list_products(self) -> List[Product]:
        rows = self.client.select("products", PRODUCT_WITH_BAKER, access_token=self._token())
        return [Product.from_row(r) for r in rows]

    def list_baker_products(self, baker_id: str) -> List[Product]:
        rows = self.client.select(
            "products",
            PRODUCT_WITH_BAKER,
            filters={"baker_id": baker_id},
            order="created_at.desc",
            access_token=self._token(),
        )
        return [Product.from_row(r) for r in rows]

    def get_product(self, product_id: str) -> Product:
        row = self.client.select_one(
            "products",
            PRODUCT_WITH_BAKER,
            filters={"id": product_id},
            access_token=self._token(),
        )
        if row is None:
            raise DataApiError("Product not found", status=404)
        return Product.from_row(row)

    def create_product(self, record: Dict[str, Any]) -> None:
        self.client.insert("products", record, access_token=self._token())

    def update_product(self, product_id: str, fields: Dict[str, Any]) -> None:
        self.client.update("products", {"id": product_id}, fields, access_token=self._token())

    def delete_product(self, product_id: str) -> None:
        self.client.delete("products", {"id": product_id}, access_token=self._token())
