"""Assistant router — chat and one-shot analysis over the caller's data."""

import structlog
from fastapi import APIRouter, Depends

from apps.api.core.ai import AIGatewayClient, get_ai_client
from apps.api.core.config import Settings, get_settings
from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.assistant.schemas import AssistantResponse, ChatRequest
from apps.api.domains.assistant.service import load_context
from packages.finance_core.context import NO_DATA_ANALYSIS, analysis_prompt, chat_system_prompt

router = APIRouter(prefix="/assistant", tags=["assistant"])
logger = structlog.get_logger()


@router.post("/chat", response_model=AssistantResponse)
async def chat(
    body: ChatRequest,
    repository: FinanceRepository = Depends(get_repository),
    ai: AIGatewayClient = Depends(get_ai_client),
    settings: Settings = Depends(get_settings),
):
    """Answer the latest message with the conversation and context attached."""
    _, context = load_context(repository, settings.CURRENCY_SYMBOL)
    messages = [{"role": "system", "content": chat_system_prompt(context)}]
    messages += [message.model_dump() for message in body.messages]

    reply = await ai.complete(messages)
    logger.info("assistant_chat_answered", turns=len(body.messages))
    return AssistantResponse(response=reply)


@router.post("/analysis", response_model=AssistantResponse)
async def analysis(
    repository: FinanceRepository = Depends(get_repository),
    ai: AIGatewayClient = Depends(get_ai_client),
    settings: Settings = Depends(get_settings),
):
    """Spending analysis. Callers without transactions get a fixed message."""
    transactions, context = load_context(repository, settings.CURRENCY_SYMBOL)
    if not transactions:
        return AssistantResponse(response=NO_DATA_ANALYSIS)

    reply = await ai.complete([{"role": "user", "content": analysis_prompt(context)}])
    logger.info("assistant_analysis_generated", transactions=len(transactions))
    return AssistantResponse(response=reply)
