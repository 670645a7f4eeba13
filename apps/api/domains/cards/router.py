"""Credit cards router — CRUD plus a health score for every card."""

from fastapi import APIRouter, Depends, Response

from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.cards.schemas import CardIn, CardListResponse
from packages.finance_core.card_scorer import assess_card
from packages.finance_core.models import CardAssessment
from packages.finance_core.months import round_half_up

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardListResponse)
async def list_cards(repository: FinanceRepository = Depends(get_repository)):
    """Every card with usage, score, tier and recommendations."""
    cards = repository.list_cards()
    return CardListResponse(
        cards=[assess_card(card) for card in cards],
        count=len(cards),
        total_used=round_half_up(sum(card.used_limit for card in cards)),
        total_limit=round_half_up(sum(card.credit_limit for card in cards)),
    )


@router.post("", response_model=CardAssessment, status_code=201)
async def create_card(body: CardIn, repository: FinanceRepository = Depends(get_repository)):
    return assess_card(repository.create_card(body.model_dump()))


@router.put("/{card_id}", response_model=CardAssessment)
async def replace_card(
    card_id: str,
    body: CardIn,
    repository: FinanceRepository = Depends(get_repository),
):
    return assess_card(repository.update_card(card_id, body.model_dump()))


@router.delete("/{card_id}", status_code=204)
async def delete_card(card_id: str, repository: FinanceRepository = Depends(get_repository)):
    repository.delete_card(card_id)
    return Response(status_code=204)
