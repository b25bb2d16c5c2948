from typing import Iterable
from medifi.modules.providers.models import Provider

def providers_for_wallet(providers: Iterable[Provider], wallet_address: str | None) -> list[Provider]:
    providers = sorted(providers, key=lambda p: p.created_at)
    if wallet_address is None:
        return providers
    return [p for p in providers if p.wallet_address == wallet_address]
