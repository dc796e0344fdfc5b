"""Voice transcription endpoint."""

from fastapi import APIRouter, Depends, Request

from .deps import get_speech_client
from ..providers.speechkit import SpeechKitClient

router = APIRouter()


@router.post("/transcribe")
async def transcribe(
    request: Request,
    client: SpeechKitClient = Depends(get_speech_client),
):
    """Transcribe an OGG/Opus request body with SpeechKit."""
    audio_bytes = await request.body()
    text = await client.recognize_from_bytes(audio_bytes)
    return {"text": text}
