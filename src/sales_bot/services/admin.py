"""Admin service for reporting."""

from dataclasses import dataclass

from sales_bot.services.sales import SaleRepository
from sales_bot.services.session_store import SessionStore


@dataclass
class AdminService:
    """Service for admin dashboards."""

    session_store: SessionStore
    sale_repository: SaleRepository

    def list_sessions(self) -> list[dict[str, object]]:
        """Return a summary of every live conversation."""
        summaries = []
        for identity, session in sorted(self.session_store.snapshot().items()):
            draft = session.draft
            summaries.append(
                {
                    "identity": identity,
                    "state": session.state.value,
                    "client_name": draft.client_name if draft else None,
                    "item_count": len(draft.line_items) if draft else 0,
                }
            )
        return summaries

    def list_sales(self, limit: int) -> list[dict[str, object]]:
        """Return recent committed sales."""
        return [
            {
                "id": sale.id,
                "identity": sale.identity,
                "client_name": sale.client_name,
                "payment_method": sale.payment_method,
                "total": float(sale.total),
                "created_at": sale.created_at.isoformat() if sale.created_at else None,
            }
            for sale in self.sale_repository.list_recent(limit)
        ]
