# FILE: aibuilder/api/voice.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from aibuilder.api.deps import get_current_user
from aibuilder.schemas.envelope import ok
from aibuilder.schemas.media import TTSRequest
from aibuilder.services import voice_service
from aibuilder.services.auth_service import Identity

router = APIRouter(prefix="/api/voice", tags=["voice"])


@router.post("/tts")
async def tts(req: TTSRequest, user: Identity = Depends(get_current_user)):
    audio = await voice_service.text_to_speech(req.text, req.voice_id)
    return Response(content=audio, media_type="audio/mpeg")


@router.post("/stt")
async def stt(request: Request, user: Identity = Depends(get_current_user)):
    audio = await request.body()
    content_type = request.headers.get("content-type") or "audio/wav"
    transcript = await voice_service.speech_to_text(audio, content_type)
    return ok({"transcript": transcript})


@router.get("/voices")
async def voices(user: Identity = Depends(get_current_user)):
    return ok(await voice_service.list_voices())


@router.get("/status")
async def status():
    return ok(voice_service.voice_status())
