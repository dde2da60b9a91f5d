from account_activation.domain.entities import Account


def has_local_credential(account: Account) -> bool:
    """The account was created with a password we store (hashed)."""
    return bool(account.password_hash)


def is_externally_authenticated(account: Account) -> bool:
    """The account's identity comes from a third-party provider (OAuth etc.)."""
    return bool(account.auth_provider)
