"""Twenty-One API endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NewGameRequest,
    OutcomeResponse,
    ReplayRequest,
)
from api.session import get_session_store
from config import config
from core.cards import Card
from core.game import MatchState, RoundState, TwentyOneMatch
from core.participants import Participant

router = APIRouter()


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(face=str(card.face), suit=str(card.suit), label=str(card))


def _hand_to_response(participant: Participant, conceal: bool = False) -> HandResponse:
    """Convert a participant's hand; a concealed hand shows only its first card."""
    cards = list(participant.hand)
    visible = cards[:1] if conceal else cards
    return HandResponse(
        name=participant.name,
        cards=[_card_to_response(c) for c in visible],
        hidden_cards=len(cards) - len(visible),
        total=None if conceal else participant.total,
        score=participant.score,
    )


def _game_state_response(match: TwentyOneMatch) -> GameStateResponse:
    """Convert match state to response."""
    current_round = match.current_round
    in_round = match.state == MatchState.IN_ROUND
    round_state: RoundState | None = current_round.state if current_round else None

    outcome = None
    if match.last_outcome is not None:
        outcome = OutcomeResponse(
            winner=match.last_outcome.winner_name,
            winner_role=match.last_outcome.winner_role,
            category=str(match.last_outcome.category),
            player_total=match.last_outcome.player_total,
            dealer_total=match.last_outcome.dealer_total,
        )

    return GameStateResponse(
        match_state=match.state.name,
        round_state=round_state.name if round_state else None,
        player=_hand_to_response(match.player),
        dealer=_hand_to_response(match.dealer, conceal=in_round),
        max_wins=match.max_wins,
        rounds_played=match.rounds_played,
        last_outcome=outcome,
        champion=match.champion.name if match.champion else None,
        can_hit=bool(in_round and current_round and current_round.can_hit),
        can_stay=bool(in_round and current_round and current_round.can_stay),
        can_start_round=match.state == MatchState.WAITING_FOR_ROUND,
    )


async def _get_match(session_id: str) -> TwentyOneMatch:
    """Look up the session's match and refresh its expiry."""
    store = get_session_store()
    session = await store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    await store.touch(session_id)
    return session.match


@router.post("/new")
async def new_game(
    request: NewGameRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Create a new match, reusing the session if one is supplied."""
    request = request or NewGameRequest()
    store = get_session_store()
    match = TwentyOneMatch.create(request.player_name, game_config=config.game)

    await store.purge_expired()
    if session_id is None or not await store.touch(session_id, match):
        session_id = await store.open(match)

    return {"session_id": session_id, "dealer": match.dealer.name}


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current match state."""
    match = await _get_match(session_id)
    return _game_state_response(match)


@router.post("/round")
async def start_round(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Shuffle a fresh deck and deal the next round."""
    match = await _get_match(session_id)

    if not match.start_round():
        raise HTTPException(status_code=400, detail=f"Cannot start a round while {match.state}")

    return _game_state_response(match)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Hit or stay; the dealer plays automatically after the player stays."""
    match = await _get_match(session_id)
    current_round = match.current_round

    if current_round is None or match.state != MatchState.IN_ROUND:
        raise HTTPException(status_code=400, detail="No round in progress")

    actions = {
        "hit": current_round.hit,
        "stay": current_round.stay,
    }
    if not actions[request.action]():
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    return _game_state_response(match)


@router.post("/replay")
async def replay(
    request: ReplayRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Answer the replay offer once a grand champion is decided."""
    match = await _get_match(session_id)

    if not match.replay(request.play_again):
        raise HTTPException(status_code=400, detail="No grand champion yet")

    return _game_state_response(match)


@router.delete("/session", status_code=204)
async def end_session(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> None:
    """Discard the session and its match."""
    await get_session_store().close(session_id)
