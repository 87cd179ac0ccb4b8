"""Registration sub-flow for identities without an account."""

from dataclasses import dataclass

from sales_bot.domain.sales import Session, State
from sales_bot.services.parsing import is_valid_email

REGISTER_KEYWORD = "register"

UNREGISTERED_TEXT = (
    "Welcome to the sales assistant!\n\n"
    "You are not registered yet. To register, type "
    f'"{REGISTER_KEYWORD} <business name>".'
)


@dataclass(frozen=True)
class RegisterAccount:
    """Request to store a new authorized account."""

    business_name: str
    email: str


@dataclass(frozen=True)
class RegistrationStep:
    """Outcome of feeding one message to the registration flow."""

    session: Session
    messages: tuple[str, ...]
    effect: RegisterAccount | None = None


def advance_registration(session: Session, text: str) -> RegistrationStep:
    """Return the next registration session and replies."""
    if session.state is State.AWAITING_EMAIL:
        if not session.business_name:
            return RegistrationStep(
                Session(),
                ("Something went wrong. Please try registering again.",),
            )
        email = text.strip()
        if not is_valid_email(email):
            return RegistrationStep(session, ("Please provide a valid email address.",))
        return RegistrationStep(
            Session(), (), RegisterAccount(session.business_name, email)
        )

    keyword, _, business_name = text.strip().partition(" ")
    if keyword.casefold() != REGISTER_KEYWORD:
        return RegistrationStep(Session(), (UNREGISTERED_TEXT,))
    business_name = business_name.strip()
    if not business_name:
        return RegistrationStep(
            session,
            (
                "Please include your business name when registering. "
                f'Example: "{REGISTER_KEYWORD} MyBusiness".',
            ),
        )
    return RegistrationStep(
        Session(state=State.AWAITING_EMAIL, business_name=business_name),
        ("Please provide an email address for your registration:",),
    )
