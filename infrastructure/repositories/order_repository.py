from typing import Any, Callable, Dict, List, Optional

from use_cases.domain_models import Order

ORDER_WITH_PRODUCT = "*, product:products(name, price)"


class OrderRepository:
    def __init__(self, client, token_provider: Callable[[], Optional[str]]):
        self.client = client
        self._token = token_provider

    def place_order(self, record: Dict[str, Any]) -> None:
        self.client.insert("orders", record, access_token=self._token())

    def list_user_orders(self, user_id: str) -> List[Order]:
        rows = self.client.select(
            "orders",
            ORDER_WITH_PRODUCT,
            filters={"user_id": user_id},
            order="created_at.desc",
            access_token=self._token(),
        )
        return [Order.from_row(r) for r in rows]


class RatingRepository:
    def __init__(self, client, token_provider: Callable[[], Optional[str]]):
        self.client = client
        self._token = token_provider

    def submit_rating(self, record: Dict[str, Any]) -> None:
        self.client.insert("ratings", record, access_token=self._token())
