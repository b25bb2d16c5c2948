import re
from medifi.core.errors import ValidationError

WALLET_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

def canonical_wallet(value: str | None, *, field: str = "ownerWallet") -> str:
    """Validate an Ethereum-style address and return it lowercased."""
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    value = value.strip()
    if not WALLET_RE.match(value):
        raise ValidationError("Invalid wallet address format", field=field)
    return value.lower()

def canonical_identity(value: str | None, *, field: str) -> str:
    # Looser form for provider wallets on grants: any non-empty string.
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    return value.lower()
