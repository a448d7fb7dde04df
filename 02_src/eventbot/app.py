"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .adapter import BotAdapter
from .bot import MAIN_MENU, build_registry
from .config import BotSettings, resolve_db_path
from .dialogs import DialogEngine
from .knowledge import IKnowledgeBase, QnAMakerClient
from .logging_config import get_logger
from .models import Activity, OutboundMessage
from .router import TurnRouter
from .storage import IStorage, MemoryStorage, SqliteStorage
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    async def process_activity(self, activity: Activity) -> list[OutboundMessage]:
        """Run one turn for an inbound activity."""
        ...

    @property
    def storage(self) -> IStorage:
        """Storage backing conversation state and trace events."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: BotSettings | None = None,
        db_path: str | None = None,
        knowledge_base: IKnowledgeBase | None = None,
    ):
        self._settings = settings or BotSettings.from_env()
        if db_path is not None:
            self._settings.db_path = resolve_db_path(db_path)

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._knowledge_base: IKnowledgeBase | None = knowledge_base
        self._owns_knowledge_base = knowledge_base is None
        self._engine: DialogEngine | None = None
        self._router: TurnRouter | None = None
        self._adapter: BotAdapter | None = None

    @property
    def settings(self) -> BotSettings:
        return self._settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        if self._settings.storage_backend == "memory":
            self._storage = MemoryStorage()
        else:
            self._storage = SqliteStorage(self._settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized (%s)", self._settings.storage_backend)

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Knowledge base (optional, no internal dependencies)
        if self._knowledge_base is None and self._settings.qna.configured:
            self._knowledge_base = QnAMakerClient(self._settings.qna)
            logger.info("Knowledge base client initialized")
        elif self._knowledge_base is None:
            logger.warning("No knowledge base configured, FAQs will use the fallback")

        # 4. Dialog registry + engine (registration errors are fatal here)
        registry = build_registry(
            self._knowledge_base, self._settings.qna.score_threshold
        )
        self._engine = DialogEngine(
            registry,
            tracker=self._tracker,
            max_prompt_retries=self._settings.max_prompt_retries,
            max_stack_depth=self._settings.max_stack_depth,
        )
        logger.info("Dialog engine initialized with %s dialogs", len(registry))

        # 5. TurnRouter (depends on engine, Storage, Tracker)
        self._router = TurnRouter(
            engine=self._engine,
            storage=self._storage,
            root_dialog_id=MAIN_MENU,
            tracker=self._tracker,
            cancel_patterns=self._settings.cancel_patterns,
            start_on_join=self._settings.start_on_join,
        )

        # 6. Adapter (depends on Tracker)
        self._adapter = BotAdapter(tracker=self._tracker)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        self._adapter = None
        self._router = None
        self._engine = None
        if self._knowledge_base and self._owns_knowledge_base:
            await self._knowledge_base.close()
            self._knowledge_base = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    async def process_activity(self, activity: Activity) -> list[OutboundMessage]:
        """Run one turn for an inbound activity."""
        return await self.adapter.process_activity(activity, self.router.on_turn)

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def router(self) -> TurnRouter:
        """Get turn router instance."""
        if not self._router:
            raise RuntimeError("Application not started")
        return self._router

    @property
    def adapter(self) -> BotAdapter:
        """Get adapter instance."""
        if not self._adapter:
            raise RuntimeError("Application not started")
        return self._adapter

    @property
    def engine(self) -> DialogEngine:
        """Get dialog engine instance."""
        if not self._engine:
            raise RuntimeError("Application not started")
        return self._engine
