from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.core.rendering import render_markdown


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class TurnStage(str, Enum):
    IDLE = "idle"
    TOPIC_EXTRACTING = "topic_extracting"
    SEARCHING = "searching"
    RESPONDING = "responding"


class Panel(str, Enum):
    CHAT = "chat"
    RESULTS = "results"


class ChatEntry(BaseModel):
    """A single line of the conversation log. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    sender: Sender
    text: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def html(self) -> str | None:
        """Assistant replies are Markdown; other entries are shown as plain text."""
        if self.sender != Sender.ASSISTANT:
            return None
        return render_markdown(self.text)


class PodcastResult(BaseModel):
    """A show returned by the podcast directory."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    title: str
    description: str | None = None
    webUrl: str | None = None
    imageUrl: str | None = None


class SearchTopic(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    search_term: str = Field(alias="searchTerm", min_length=1)


class ConversationState(BaseModel):
    """
    Everything the page needs to render: the append-only message log,
    the latest result set and the turn progress flags.
    """

    messages: list[ChatEntry] = Field(default_factory=list)
    podcasts: list[PodcastResult] = Field(default_factory=list)
    loading: bool = False
    stage: TurnStage = TurnStage.IDLE
    active_panel: Panel = Panel.CHAT

    def append(self, sender: Sender, text: str) -> ChatEntry:
        entry = ChatEntry(sender=sender, text=text)
        self.messages.append(entry)
        return entry
