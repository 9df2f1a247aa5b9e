from altseo.bulk.controller import BulkJobController
from altseo.bulk.state_repository import BulkStateRepository
from altseo.config.settings import Settings
from altseo.documents.base import BaseDocumentStore
from altseo.documents.document_repository import DocumentRepository
from altseo.generation.client_base import BaseCompletionClient
from altseo.generation.factory import GeneratorFactory
from altseo.generation.image_loader import ImageLoader
from altseo.storage.base import BaseKeyValueStore
from altseo.storage.factory import StateStoreFactory


def build_controller(
    settings: Settings,
    store: BaseKeyValueStore | None = None,
    document_store: BaseDocumentStore | None = None,
    client: BaseCompletionClient | None = None,
    image_loader: ImageLoader | None = None,
) -> BulkJobController:
    """Build a BulkJobController with all required collaborators."""
    store = store or StateStoreFactory.create(settings)
    document_store = document_store or DocumentRepository(settings.bulk_document_types)
    generators = GeneratorFactory.create(
        settings, document_store, client=client, image_loader=image_loader
    )
    state_repo = BulkStateRepository(
        store,
        lock_timeout_seconds=settings.bulk_lock_timeout_seconds,
    )
    return BulkJobController(
        state_repo,
        document_store,
        generators,
        step_time_limit_seconds=settings.bulk_step_time_limit_seconds,
    )
