from loguru import logger

from app.core.constants import NO_PODCASTS_DIGEST
from app.models.chat import PodcastResult
from app.services.gemini import GeminiService
from app.services.session_store import ChatSessionStore

SYSTEM_INSTRUCTION = """
You are a friendly podcast recommendation assistant. Your job is to:

1. Understand the user's mood and interests based on their message
2. Recommend relevant podcasts from the provided list
3. Engage in natural conversation about the topics
4. Provide brief insights about why each podcast might interest them

When mentioning podcasts, always include:
- The title (as a link if webUrl is available)
- A brief description
- Why it might interest the user

If the user prompt is not clear, ask for clarification. If you don't understand the user's intent, say so.
- I am not sure what you mean by " Prompt "
- I'm sorry, I didn't understand. Could you please rephrase?
- Please ask me questions related to podcasts recommendation only

Format podcast recommendations clearly with proper spacing.
"""


def build_digest(podcasts: list[PodcastResult]) -> str:
    if not podcasts:
        return NO_PODCASTS_DIGEST
    return "\n\n".join(f"Title: {p.title}\nDescription: {p.description or ''}\nURL: {p.webUrl or ''}" for p in podcasts)


def build_prompt(utterance: str, podcasts: list[PodcastResult]) -> str:
    return (
        f"User message: {utterance}\n\n"
        f"Available podcasts from API according to user's mood:\n{build_digest(podcasts)}"
    )


class ContextualResponder:
    """
    Replies to the user inside a persistent per-session Gemini chat, grounded on
    the podcasts found in the current turn.
    """

    def __init__(self, gemini: GeminiService, sessions: ChatSessionStore):
        self.gemini = gemini
        self.sessions = sessions

    async def reply(self, utterance: str, session_key: str, podcasts: list[PodcastResult]) -> str:
        chat = self.sessions.get_or_create(session_key)
        logger.debug(f"[{session_key}] Replying with {len(podcasts)} podcasts as context")
        return await self.gemini.send_message(chat, build_prompt(utterance, podcasts))


def new_session_store(gemini: GeminiService, idle_ttl: int = 0) -> ChatSessionStore:
    """Session store whose handles are Gemini chats primed with the recommender instruction."""
    return ChatSessionStore(lambda: gemini.start_chat(SYSTEM_INSTRUCTION), idle_ttl=idle_ttl)
