"""Conversation service tying sessions, accounts and sale persistence."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from sales_bot.domain.sales import DraftTransaction, SaleRecord, Session
from sales_bot.services.accounts import AccountService
from sales_bot.services.flow import CommitSale, FlowEngine, FlowStep
from sales_bot.services.registration import (
    RegisterAccount,
    RegistrationStep,
    advance_registration,
)
from sales_bot.services.session_store import SessionStore

logger = logging.getLogger(__name__)

GENERIC_ERROR_TEXT = "Something went wrong. Please try again."
SALE_RECORDED_TEXT = "Sale recorded successfully!"
SALE_FAILED_TEXT = "There was an error recording the sale. Please try again."
REGISTERED_TEXT = 'Registration complete! You can now type "start sale" to begin.'
REGISTRATION_FAILED_TEXT = (
    "There was a problem registering your business. Please try again."
)


class SaleRepository(Protocol):
    """Persistence interface for committed sales."""

    def commit(self, identity: str, draft: DraftTransaction) -> str:
        """Record a confirmed draft and return the transaction id."""

    def list_recent(self, limit: int) -> list[SaleRecord]:
        """Return the most recent sales, newest first."""


@dataclass
class SalesConversationService:
    """Drive one inbound message through the sales conversation."""

    session_store: SessionStore
    account_service: AccountService
    sale_repository: SaleRepository
    engine: FlowEngine = field(default_factory=FlowEngine)

    async def handle_message(self, identity: str, text: str) -> list[str]:
        """Advance the identity's conversation and return the replies in order."""
        try:
            session = self.session_store.get(identity)
            logger.info(
                "Handling message",
                extra={"identity": identity, "state": session.state.value},
            )
            authorized = await asyncio.to_thread(
                self.account_service.is_authorized, identity
            )
            if not authorized:
                return await self._register(identity, session, text)
            return await self._sell(identity, session, text)
        except Exception:
            logger.exception(
                "Failed to process message", extra={"identity": identity}
            )
            self.session_store.clear(identity)
            return [GENERIC_ERROR_TEXT]

    def cancel(self, identity: str) -> str:
        """Discard the identity's in-progress sale, if any."""
        session = self.session_store.get(identity)
        self.session_store.clear(identity)
        if session.is_idle:
            return "There is no sale in progress."
        return "Sale cancelled."

    async def _sell(self, identity: str, session: Session, text: str) -> list[str]:
        step: FlowStep = self.engine.advance(session, text)
        self._store(identity, step.session)
        messages = list(step.messages)
        if isinstance(step.effect, CommitSale):
            messages.append(await self._commit(identity, step.effect.draft))
        return messages

    async def _commit(self, identity: str, draft: DraftTransaction) -> str:
        try:
            sale_id = await asyncio.to_thread(
                self.sale_repository.commit, identity, draft
            )
        except Exception:
            logger.exception("Failed to record sale", extra={"identity": identity})
            return SALE_FAILED_TEXT
        logger.info(
            "Recorded sale",
            extra={"identity": identity, "sale_id": sale_id, "total": str(draft.total)},
        )
        return SALE_RECORDED_TEXT

    async def _register(
        self, identity: str, session: Session, text: str
    ) -> list[str]:
        step: RegistrationStep = advance_registration(session, text)
        self._store(identity, step.session)
        messages = list(step.messages)
        if isinstance(step.effect, RegisterAccount):
            try:
                await asyncio.to_thread(
                    self.account_service.register,
                    identity,
                    step.effect.business_name,
                    step.effect.email,
                )
            except Exception:
                logger.exception(
                    "Failed to register account", extra={"identity": identity}
                )
                messages.append(REGISTRATION_FAILED_TEXT)
            else:
                messages.append(REGISTERED_TEXT)
        return messages

    def _store(self, identity: str, session: Session) -> None:
        if session.is_idle:
            self.session_store.clear(identity)
        else:
            self.session_store.put(identity, session)
