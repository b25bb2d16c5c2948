from medifi.core.repository import DocumentRepository
from medifi.modules.records.models import HealthRecord

class RecordRepository(DocumentRepository[HealthRecord]):
    model = HealthRecord
    collection = "health_records"
