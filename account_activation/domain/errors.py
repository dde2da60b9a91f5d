from enum import Enum


class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class InvalidAccount(DomainError):
    """Account fields failed validation before a save."""

    pass


class AccountAlreadyExists(DomainError):
    """An account with the given email already exists."""

    pass


class PersistenceError(DomainError):
    """The storage layer failed to write or read an account."""

    pass


class MailerMisconfigured(DomainError):
    """Activation emails are enabled but cannot be delivered."""

    pass


class InvalidCredentials(DomainError):
    pass


class DenialReason(str, Enum):
    INACTIVE = "inactive"


class AccountNotActive(DomainError):
    """Login refused by the activation gate."""

    def __init__(self, reason: DenialReason = DenialReason.INACTIVE) -> None:
        super().__init__(reason.value)
        self.reason = reason


class ActivationError(DomainError):
    """Base class for activation token failures."""

    pass


class TokenNotFound(ActivationError):
    """No account carries the presented activation token."""

    pass


class TokenExpired(ActivationError):
    """The token matched an account but is past its validity window."""

    pass


class AccountAlreadyActive(ActivationError):
    """Tried to (re)issue a token for an account that cannot be pending."""

    pass
