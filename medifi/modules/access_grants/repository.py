from medifi.core.repository import DocumentRepository
from medifi.modules.access_grants.models import AccessGrant

class AccessGrantRepository(DocumentRepository[AccessGrant]):
    model = AccessGrant
    collection = "access_grants"
