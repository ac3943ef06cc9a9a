import logging

from fastapi import APIRouter, Depends, HTTPException

from memora_backend.core.dependencies import get_writing_assistant
from memora_backend.schemas.ai import CaptionRequest, CaptionResponse, ImproveTextRequest, ImproveTextResponse
from memora_backend.services.writing_assistant import WritingAssistant, WritingAssistantError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/improve-text", response_model=ImproveTextResponse)
async def improve_text(
    payload: ImproveTextRequest,
    assistant: WritingAssistant = Depends(get_writing_assistant),
):
    """
    Suggest improved versions of a journal entry. Falls back to the original text
    when the model returns nothing usable.
    """
    if not payload.text:
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        versions = await assistant.improve_text(payload.text)
    except WritingAssistantError as e:
        logger.error(f"OpenAI API error improving text: {e}")
        raise HTTPException(status_code=500, detail="Failed to improve text")

    return ImproveTextResponse(versions=versions)


@router.post("/generate-caption", response_model=CaptionResponse)
async def generate_caption(
    payload: CaptionRequest,
    assistant: WritingAssistant = Depends(get_writing_assistant),
):
    try:
        caption = await assistant.generate_caption(payload.description, payload.metadata)
    except WritingAssistantError as e:
        logger.error(f"OpenAI API error generating caption: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate caption")

    return CaptionResponse(caption=caption)
