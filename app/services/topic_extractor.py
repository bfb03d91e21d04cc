import json

from loguru import logger
from pydantic import ValidationError

from app.core.exceptions import ParseError
from app.models.chat import SearchTopic
from app.services.gemini import GeminiService


def parse_topic_response(text: str) -> SearchTopic:
    """
    Best-effort extraction of the ``{"searchTerm": ...}`` object from model output.

    Takes everything between the first ``{`` and the last ``}`` so leading or
    trailing commentary is tolerated. Anything else fails with ParseError.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ParseError(f"No JSON object in topic response: {text[:80]!r}")

    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in topic response: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("Topic response is not a JSON object")
    try:
        return SearchTopic.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Topic response has no usable searchTerm: {e}") from e


class TopicExtractor:
    """
    Turns a free-form utterance into a short podcast search topic.
    Stateless: every call is an independent single-turn completion.
    """

    def __init__(self, gemini: GeminiService):
        self.gemini = gemini

    @staticmethod
    def get_prompt():
        return """
        You are a podcast recommender AI that understands the emotion, context, or curiosity
        behind a user's message.
        Based on their message, return a single word or a very short phrase representing the
        podcast topic they would want to listen to right now.

        Your response should:
        - Always be JSON in the format {"searchTerm": "<the word/phrase according to user's mood>"}
        - Be specific, not generic. Avoid vague terms like "Heartbreak" if "Toxic Relationship"
          or "Ghosting" fits better.
        - Be emotionally or topically intuitive, not keyword-based.
        - Reflect the deeper mood, topic, or interest implied in the message.
        - Not be limited to a fixed list. Generate new, natural-sounding topics if needed.
        - Contain only the topic. No explanation, no emojis, no extra text.
        """

    async def extract_topic(self, utterance: str) -> SearchTopic:
        text = await self.gemini.generate_content(utterance, system_instruction=self.get_prompt())
        topic = parse_topic_response(text)
        logger.info(f"Extracted search topic: {topic.search_term!r}")
        return topic
