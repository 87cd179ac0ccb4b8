"""Supabase-backed account repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from sales_bot.domain.accounts import Account
from sales_bot.services.accounts import AccountRepository


@dataclass
class SupabaseAccountRepository(AccountRepository):
    """Supabase implementation for authorized accounts."""

    client: Client

    def get_account(self, identity: str) -> Account | None:
        """Return the account for an identity, if present."""
        response = (
            self.client.table("authorized_users")
            .select("identity, business_name, email")
            .eq("identity", identity)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_account(response.data[0])

    def create_account(self, identity: str, business_name: str, email: str) -> Account:
        """Insert an account row and return it."""
        response = (
            self.client.table("authorized_users")
            .insert(
                {
                    "identity": identity,
                    "business_name": business_name,
                    "email": email,
                    "registered_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to register account")
        return _to_account(response.data[0])


def _to_account(row: dict[str, object]) -> Account:
    return Account(
        identity=str(row["identity"]),
        business_name=str(row["business_name"]),
        email=str(row["email"]),
    )
