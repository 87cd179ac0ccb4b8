"""Domain models for authorized accounts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """A business allowed to record sales."""

    identity: str
    business_name: str
    email: str
