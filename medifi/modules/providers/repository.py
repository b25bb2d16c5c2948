from medifi.core.repository import DocumentRepository
from medifi.modules.providers.models import Provider

class ProviderRepository(DocumentRepository[Provider]):
    model = Provider
    collection = "providers"
