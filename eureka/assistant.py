"""
Idea assistant API endpoints: chat, structured idea extraction and deck export
"""

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from eureka.config import get_api_key
from eureka.deck import Deck, assemble_idea_deck, build_outline_deck
from eureka.llm import IdeaAssistant
from eureka.models import AssistantRequest, IdeaRecord, StructureRequest, describe_validation_error
from eureka.outline import extract_idea_titles, parse_outline
from eureka.presenton import get_presenton_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/idea-assistant", tags=["idea-assistant"])

MISSING_KEY_ERROR = "Server missing GOOGLE_API_KEY"
OUTLINE_NOT_FOUND_ERROR = "Could not find a '### Slide outline' section with numbered slides"


def get_assistant(api_key: str) -> IdeaAssistant:
    """Create the assistant for one request."""
    return IdeaAssistant(api_key=api_key)


def deck_response(deck: Deck) -> Response:
    return Response(
        content=deck.content,
        media_type=deck.media_type,
        headers={"Content-Disposition": f"attachment; filename={deck.filename}"},
    )


@router.post("")
async def chat(request: Request):
    """Send the conversation to the model and return its markdown reply"""
    try:
        api_key = get_api_key()
        if not api_key:
            return JSONResponse({"error": MISSING_KEY_ERROR}, status_code=500)

        try:
            body = AssistantRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            return JSONResponse({"error": "Invalid input"}, status_code=400)

        conversation = body.conversation()
        if not any(m.role == "user" for m in conversation):
            return JSONResponse({"error": "Invalid input"}, status_code=400)

        assistant = get_assistant(api_key)
        result = await asyncio.to_thread(assistant.chat, conversation)
        return JSONResponse({
            "reply": result.reply,
            "modelUsed": result.model_used,
            "ideaTitles": extract_idea_titles(result.reply),
        })
    except Exception as e:
        logger.exception("/idea-assistant error")
        return JSONResponse({"error": str(e)}, status_code=500)


@router.post("/structure")
async def structure(request: Request):
    """Turn the focused chat about one idea into an idea record for deck export"""
    try:
        api_key = get_api_key()
        if not api_key:
            return JSONResponse({"error": MISSING_KEY_ERROR}, status_code=500)

        try:
            body = StructureRequest.model_validate(await request.json())
        except ValidationError as e:
            return JSONResponse({"error": describe_validation_error(e)}, status_code=400)
        except ValueError:
            return JSONResponse({"error": "Invalid payload"}, status_code=400)

        assistant = get_assistant(api_key)
        idea = await asyncio.to_thread(assistant.structure_idea, body.title, body.messages, body.notes)
        return JSONResponse({"idea": idea.model_dump(by_alias=True, exclude_none=True)})
    except Exception as e:
        logger.exception("/idea-assistant/structure error")
        return JSONResponse({"error": str(e)}, status_code=500)


@router.post("/ppt")
async def export_deck(request: Request):
    """
    Build a PPTX deck from an idea record or from the assistant's slide outline.
    An idea with a string title takes precedence over outlineMarkdown.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"error": "Invalid payload"}, status_code=400)
        if not isinstance(body, dict):
            body = {}

        idea_data = body.get("idea")
        if isinstance(idea_data, dict) and isinstance(idea_data.get("title"), str):
            try:
                idea = IdeaRecord.model_validate(idea_data)
            except ValidationError as e:
                return JSONResponse({"error": f"Invalid idea: {describe_validation_error(e)}"}, status_code=400)

            remote = get_presenton_client() if body.get("usePresenton") else None
            deck = await assemble_idea_deck(idea, remote)
            logger.info(f"Built {deck.source} idea deck {deck.filename}")
            return deck_response(deck)

        outline_markdown = body.get("outlineMarkdown")
        if not outline_markdown or not isinstance(outline_markdown, str):
            return JSONResponse({"error": "outlineMarkdown or idea is required"}, status_code=400)

        title = body.get("title")
        outline = parse_outline(outline_markdown, title if isinstance(title, str) else None)
        if outline is None:
            return JSONResponse({"error": OUTLINE_NOT_FOUND_ERROR}, status_code=400)

        deck = await asyncio.to_thread(build_outline_deck, outline)
        logger.info(f"Built outline deck with {len(outline.slides)} slides")
        return deck_response(deck)
    except Exception as e:
        logger.exception("/idea-assistant/ppt error")
        return JSONResponse({"error": str(e)}, status_code=500)
