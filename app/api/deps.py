from typing import Annotated

from fastapi import Depends, Request

from app.services.conversation import ConversationOrchestrator


async def get_orchestrator(request: Request) -> ConversationOrchestrator:
    return request.app.state.orchestrator


OrchestratorCurrent = Annotated[ConversationOrchestrator, Depends(get_orchestrator)]
