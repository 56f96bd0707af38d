import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from parking_service.app.crud import message_crud
from parking_service.app.schemas.chat_schemas import (
    ChatReply, ChatRequest, NearbyChatReply, NearbyChatRequest, NearbySpace)
from parking_service.app.services.completion_client import CompletionClient
from shared.helpers.value_helper import haversine, parse_float

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Parkpal, an AI parking assistant helping users find and book "
    "parking around London. Ask clear follow-up questions and help them book "
    "parking with confidence."
)

FALLBACK_REPLY = "Sorry, I didn't understand that."

NEARBY_RADIUS_KM = 10
NEARBY_MAX_RESULTS = 3

KEYWORD_SPLIT = re.compile(r"[\s,]+")


def build_messages(system_prompt: str, req: ChatRequest) -> List[dict]:
    return [
        {"role": "system", "content": system_prompt},
        *({"role": turn.role, "content": turn.content} for turn in req.conversation),
        {"role": "user", "content": req.message},
    ]


def chat(db: Session, completions: CompletionClient, req: ChatRequest) -> ChatReply:
    reply = completions.complete(build_messages(SYSTEM_PROMPT, req)) or FALLBACK_REPLY

    # independent of the reply; a failed write only gets logged
    message_crud.save_exchange(db, req.message, reply)

    return ChatReply(message=reply)


# ---------------------------------------------------------------------------
# Grounding on spaces the client already fetched


def _space_keywords(spaces: List[NearbySpace]) -> set:
    keywords = set()
    for space in spaces:
        for text in (space.location, space.address, space.postcode):
            if text:
                keywords.update(w for w in KEYWORD_SPLIT.split(text.lower()) if w)
    return keywords


def _matches_keyword(space: NearbySpace, keywords: List[str]) -> bool:
    fields = [(space.location or "").lower(), (space.address or "").lower(),
              (space.postcode or "").lower()]
    return any(keyword in field for keyword in keywords for field in fields)


def rank_nearby_spaces(req: NearbyChatRequest) -> List[Tuple[NearbySpace, Optional[float]]]:
    """Spaces within range or named in the message, nearest first, at most three.

    Spaces without usable coordinates can still match by keyword; they sort last.
    """
    message = req.message.lower()
    matched_keywords = [k for k in _space_keywords(req.spaces) if k in message]

    candidates = []
    for space in req.spaces:
        lat, lon = parse_float(space.latitude), parse_float(space.longitude)
        distance = None
        if lat is not None and lon is not None:
            distance = haversine(req.location.latitude, req.location.longitude, lat, lon)

        is_nearby = distance is not None and distance <= NEARBY_RADIUS_KM
        if is_nearby or _matches_keyword(space, matched_keywords):
            candidates.append((space, distance))

    candidates.sort(key=lambda pair: (pair[1] is None, pair[1] or 0))
    return candidates[:NEARBY_MAX_RESULTS]


def _summarise(ranked: List[Tuple[NearbySpace, Optional[float]]]) -> str:
    if not ranked:
        return "There are no available spaces near the user's location or mentioned area."

    lines = []
    for i, (space, distance) in enumerate(ranked, start=1):
        price = f"£{space.price_per_day:g}/day" if space.price_per_day is not None else "price on request"
        away = f"{distance:.1f} km away" if distance is not None else "distance unknown"
        lines.append(f"{i}. {space.title or 'Parking space'} - {price} - {space.address or ''} - {away}")
    return "\n".join(lines)


def nearby_system_prompt(req: NearbyChatRequest, ranked) -> str:
    return (
        "You are a helpful assistant for Parkpal. The user is asking for parking help.\n\n"
        "Their current location is:\n"
        f"- Latitude: {req.location.latitude}\n"
        f"- Longitude: {req.location.longitude}\n\n"
        "Nearby available parking spaces:\n"
        f"{_summarise(ranked)}\n\n"
        "Your job:\n"
        "- If there are spaces, briefly guide the user toward them.\n"
        "- If none are available, politely inform them and suggest trying a different location or checking back later.\n"
        "- Never mention fetching or searching, all data is already provided.\n"
        "- Be helpful, concise, and friendly. Use 1-2 sentences max."
    )


def chat_nearby(completions: CompletionClient, req: NearbyChatRequest) -> NearbyChatReply:
    ranked = rank_nearby_spaces(req)
    logger.info("Grounding chat on %d of %d client spaces", len(ranked), len(req.spaces))

    reply = completions.complete(
        build_messages(nearby_system_prompt(req, ranked), req)) or FALLBACK_REPLY

    parking_spaces = [
        {**space.model_dump(), "distance": distance} for space, distance in ranked
    ]
    return NearbyChatReply(
        message=reply,
        timestamp=datetime.now(timezone.utc),
        parkingSpaces=parking_spaces,
        totalFound=len(parking_spaces),
    )
