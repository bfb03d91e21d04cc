"""
The single orchestration point for a conversation.

One turn runs extract -> search -> reply sequentially and moves the shared
ConversationState through ``idle -> topic_extracting -> searching -> responding
-> idle``. Any failure along the chain ends the turn with one generic system
entry; ``loading`` is cleared on every terminal path.
"""

from loguru import logger

from app.core.config import settings
from app.core.constants import GENERIC_FAILURE_MESSAGE, SEARCHING_MESSAGE
from app.models.chat import ConversationState, Panel, Sender, TurnStage
from app.services.podchaser.service import PodcastSearchService
from app.services.responder import ContextualResponder
from app.services.topic_extractor import TopicExtractor


class ConversationOrchestrator:
    def __init__(
        self,
        extractor: TopicExtractor,
        search: PodcastSearchService,
        responder: ContextualResponder,
        session_key: str = settings.DEFAULT_SESSION_KEY,
    ):
        self.extractor = extractor
        self.search = search
        self.responder = responder
        self.session_key = session_key
        self.state = ConversationState()

    async def close(self) -> None:
        """Release the HTTP client and drop cached chat sessions."""
        await self.search.close()
        self.responder.sessions.clear()

    @property
    def busy(self) -> bool:
        return self.state.loading

    def add_system(self, text: str) -> None:
        self.state.append(Sender.SYSTEM, text)

    def toggle_panel(self) -> Panel:
        self.state.active_panel = Panel.RESULTS if self.state.active_panel == Panel.CHAT else Panel.CHAT
        return self.state.active_panel

    async def submit(self, text: str, narrow_viewport: bool = False) -> bool:
        """
        Run one turn for ``text``.

        Returns False without touching state when the text is blank or another
        turn is still in flight; True once the turn reached its terminal entry.
        """
        if not text or not text.strip():
            return False
        if self.busy:
            logger.info(f"[{self.session_key}] Submission rejected, a turn is in flight")
            return False

        self.state.append(Sender.USER, text)
        self.state.loading = True
        try:
            await self._run_turn(text, narrow_viewport)
        except Exception as e:
            logger.exception(f"[{self.session_key}] Turn failed: {e}")
            self.add_system(GENERIC_FAILURE_MESSAGE)
        finally:
            self.state.stage = TurnStage.IDLE
            self.state.loading = False
        return True

    async def _run_turn(self, text: str, narrow_viewport: bool) -> None:
        self.state.stage = TurnStage.TOPIC_EXTRACTING
        topic = await self.extractor.extract_topic(text)
        self.add_system(SEARCHING_MESSAGE.format(term=topic.search_term))

        self.state.stage = TurnStage.SEARCHING
        podcasts = await self.search.search(topic.search_term, notify=self.add_system)
        self.state.podcasts = podcasts

        self.state.stage = TurnStage.RESPONDING
        reply = await self.responder.reply(text, self.session_key, podcasts)
        self.state.append(Sender.ASSISTANT, reply)

        if narrow_viewport and podcasts:
            self.state.active_panel = Panel.RESULTS
