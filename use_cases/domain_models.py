from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

OrderStatus = Literal["pending", "confirmed", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "completed", "failed"]
NotificationVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    """DTO for a single toast shown to the user."""
    title: str
    description: str = ""
    variant: NotificationVariant = "default"


@dataclass(frozen=True)
class BakerRef:
    id: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    category: str
    baker_id: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    average_rating: Optional[float] = None
    order_count: Optional[int] = None
    created_at: Optional[str] = None
    baker: Optional[BakerRef] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Product":
        baker_row = row.get("baker")
        baker = None
        if isinstance(baker_row, dict):
            baker = BakerRef(
                id=baker_row.get("id"),
                full_name=baker_row.get("full_name"),
                phone=baker_row.get("phone"),
            )
        rating = row.get("average_rating")
        count = row.get("order_count")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            price=float(row.get("price") or 0),
            category=row.get("category") or "",
            baker_id=str(row.get("baker_id") or ""),
            description=row.get("description"),
            image_url=row.get("image_url"),
            average_rating=float(rating) if rating is not None else None,
            order_count=int(count) if count is not None else None,
            created_at=row.get("created_at"),
            baker=baker,
        )


@dataclass(frozen=True)
class Order:
    id: str
    product_id: str
    user_id: str
    quantity: int
    status: OrderStatus = "pending"
    payment_status: PaymentStatus = "pending"
    created_at: Optional[str] = None
    product_name: Optional[str] = None
    product_price: Optional[float] = None

    @property
    def total(self) -> Optional[float]:
        if self.product_price is None:
            return None
        return round(self.quantity * self.product_price, 2)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Order":
        product = row.get("product") or {}
        price = product.get("price")
        return cls(
            id=str(row["id"]),
            product_id=str(row.get("product_id") or ""),
            user_id=str(row.get("user_id") or ""),
            quantity=int(row.get("quantity") or 0),
            status=row.get("status") or "pending",
            payment_status=row.get("payment_status") or "pending",
            created_at=row.get("created_at"),
            product_name=product.get("name"),
            product_price=float(price) if price is not None else None,
        )

