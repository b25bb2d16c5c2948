from medifi.core.base import TimestampedDocument

class HealthRecord(TimestampedDocument):
    name: str
    type: str           # lab_result | prescription | imaging | ... (free text)
    date: str           # as entered by the owner, must parse as a date
    content_hash: str = ""   # IPFS CID once content is attached
    content_url: str = ""
    owner_wallet: str   # lowercase 0x address
