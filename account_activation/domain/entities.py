from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from account_activation.domain.errors import InvalidAccount


class ActivationState(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


@dataclass
class Account:
    id: str | None = None
    email: str | None = None
    password_hash: str | None = None
    auth_provider: str | None = None
    activation_state: ActivationState | None = None
    activation_token: str | None = None
    activation_token_expires_at: datetime | None = None

    # Per-instance switches for a single operation, never persisted.
    skip_activation_needed_email: bool = field(
        default=False, compare=False, repr=False
    )
    skip_activation_success_email: bool = field(
        default=False, compare=False, repr=False
    )

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")
        if self.activation_state is not None:
            self.activation_state = ActivationState(self.activation_state)

    @property
    def is_active(self) -> bool:
        return self.activation_state is ActivationState.ACTIVE

    def validate(self) -> None:
        """Field validation applied by repositories on a regular save."""
        local, _, domain = (self.email or "").partition("@")
        if not local or "." not in domain:
            raise InvalidAccount(f"invalid email: {self.email!r}")
        if not self.password_hash and not self.auth_provider:
            raise InvalidAccount("account needs a password or an auth provider")
