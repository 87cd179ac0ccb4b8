"""Account authorization and registration."""

import logging
from dataclasses import dataclass
from typing import Protocol

from sales_bot.domain.accounts import Account

logger = logging.getLogger(__name__)


class AccountRepository(Protocol):
    """Persistence interface for authorized accounts."""

    def get_account(self, identity: str) -> Account | None:
        """Return the account for an identity, if present."""

    def create_account(self, identity: str, business_name: str, email: str) -> Account:
        """Create and return a new account."""


@dataclass
class AccountService:
    """Application service gating access to the sales flow."""

    repository: AccountRepository

    def is_authorized(self, identity: str) -> bool:
        """Return true when the identity has a registered account."""
        authorized = self.repository.get_account(identity) is not None
        logger.info(
            "Checked authorization",
            extra={"identity": identity, "authorized": authorized},
        )
        return authorized

    def register(self, identity: str, business_name: str, email: str) -> Account:
        """Register a business for the identity."""
        account = self.repository.create_account(identity, business_name, email)
        logger.info(
            "Registered account",
            extra={"identity": identity, "business_name": business_name},
        )
        return account
