from medifi.core.base import TimestampedDocument

class Provider(TimestampedDocument):
    name: str
    wallet_address: str  # lowercase, unique across providers
