"""Supabase-backed sale repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from supabase import Client

from sales_bot.domain.sales import DraftTransaction, SaleRecord
from sales_bot.services.sales import SaleRepository


@dataclass
class SupabaseSaleRepository(SaleRepository):
    """Supabase implementation for committed sales."""

    client: Client

    def commit(self, identity: str, draft: DraftTransaction) -> str:
        """Insert a completed sale row and return its id."""
        response = (
            self.client.table("sales")
            .insert(
                {
                    "user_id": identity,
                    "client_name": draft.client_name,
                    "products": [
                        {
                            "description": item.description,
                            "unit_type": item.unit_type,
                            "quantity": float(item.quantity),
                            "price": float(item.price),
                        }
                        for item in draft.line_items
                    ],
                    "payment_method": draft.payment_method,
                    "total": float(draft.total),
                    "status": "completed",
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record sale")
        return str(response.data[0]["id"])

    def list_recent(self, limit: int) -> list[SaleRecord]:
        """Return recent sales ordered by creation time."""
        response = (
            self.client.table("sales")
            .select("id, user_id, client_name, payment_method, total, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [
            SaleRecord(
                id=str(row["id"]),
                identity=str(row["user_id"]),
                client_name=row.get("client_name") or "",
                payment_method=row.get("payment_method"),
                total=Decimal(str(row.get("total") or 0)),
                created_at=(
                    datetime.fromisoformat(row["created_at"])
                    if row.get("created_at")
                    else None
                ),
            )
            for row in response.data or []
        ]
