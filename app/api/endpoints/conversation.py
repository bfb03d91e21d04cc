from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import OrchestratorCurrent
from app.models.chat import ConversationState, Panel

router = APIRouter(prefix="/api/conversation", tags=["conversation"])


class MessageRequest(BaseModel):
    text: str = Field(default="", description="What the user typed")
    narrowViewport: bool = Field(default=False, description="True when the page is narrower than 768px")


class TurnResponse(BaseModel):
    accepted: bool
    state: ConversationState


class PanelResponse(BaseModel):
    active_panel: Panel


@router.get("", response_model=ConversationState)
async def get_conversation(orchestrator: OrchestratorCurrent) -> ConversationState:
    return orchestrator.state


@router.post("/messages", response_model=TurnResponse)
async def post_message(payload: MessageRequest, orchestrator: OrchestratorCurrent) -> TurnResponse:
    if payload.text.strip() and orchestrator.busy:
        raise HTTPException(status_code=409, detail="A recommendation is already in progress.")
    accepted = await orchestrator.submit(payload.text, narrow_viewport=payload.narrowViewport)
    return TurnResponse(accepted=accepted, state=orchestrator.state)


@router.post("/panel", response_model=PanelResponse)
async def toggle_panel(orchestrator: OrchestratorCurrent) -> PanelResponse:
    return PanelResponse(active_panel=orchestrator.toggle_panel())
