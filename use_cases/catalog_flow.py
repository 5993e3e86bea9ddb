"""Read-side shaping of catalog, order and dashboard data for the views."""

import re
from typing import Dict, Iterable, List, Optional

import pandas as pd

from use_cases.domain_models import Order, Product


def category_key(category: str) -> str:
    return " ".join((category or "").split()).lower()


def group_by_category(products: Iterable[Product]) -> Dict[str, List[Product]]:
    """
    Groups products case-insensitively. The label of a group is the spelling of
    its first product; groups keep first-seen order.
    """
    labels: Dict[str, str] = {}
    groups: Dict[str, List[Product]] = {}
    for product in products:
        key = category_key(product.category)
        if key not in labels:
            labels[key] = " ".join(product.category.split()) or "Uncategorized"
            groups[labels[key]] = []
        groups[labels[key]].append(product)
    return groups


def orders_frame(orders: Iterable[Order]) -> pd.DataFrame:
    rows = [
        {
            "Product": o.product_name or "—",
            "Quantity": o.quantity,
            "Total": o.total,
            "Status": o.status,
            "Payment": o.payment_status,
            "Date": pd.to_datetime(o.created_at, errors="coerce"),
        }
        for o in orders
    ]
    return pd.DataFrame(rows, columns=["Product", "Quantity", "Total", "Status", "Payment", "Date"])


def product_stats_frame(products: Iterable[Product]) -> pd.DataFrame:
    """Per-product order count and average rating, as computed by the backend."""
    df = pd.DataFrame(
        [
            {
                "Product": p.name,
                "Category": p.category,
                "Orders": p.order_count or 0,
                "Rating": p.average_rating,
            }
            for p in products
        ],
        columns=["Product", "Category", "Orders", "Rating"],
    )
    return df.sort_values("Orders", ascending=False).reset_index(drop=True)


def whatsapp_link(phone: Optional[str]) -> Optional[str]:
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return None
    return f"https://wa.me/{digits}"
