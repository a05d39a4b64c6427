from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from insight_engine.config import AIConfig, get_ai_config
from insight_engine.database import get_db
from insight_engine.llm.summary import generate_session_summary
from insight_engine.schemas.session import (
    Session,
    SessionCreate,
    SessionSummaryRequest,
    SessionSummaryResponse,
)
from insight_engine.services.session_service import SessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=Session, status_code=201)
async def create_session(
    data: SessionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a therapy session."""
    return await SessionService(db).create_session(data)


@router.get("/{session_id}", response_model=Session)
async def get_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
):
    session = await SessionService(db).get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}/summary", response_model=SessionSummaryResponse)
async def summarize_session(
    session_id: str,
    request: SessionSummaryRequest | None = None,
    db: AsyncSession = Depends(get_db),
    config: AIConfig = Depends(get_ai_config),
):
    """Generate a role-specific AI summary for a session."""
    session = await SessionService(db).get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if not session.notes.subjective:
        raise HTTPException(
            status_code=400,
            detail="Session has no subjective notes to summarize. Please add session notes first.",
        )

    transcript = request.transcript if request else None
    result = await generate_session_summary(session, config, transcript=transcript)
    if result.error:
        raise HTTPException(status_code=500, detail=f"Summary generation failed: {result.error}")

    return SessionSummaryResponse(
        summary=result.text,
        mode=result.mode.value,
        model=result.model,
        tokens_used=result.tokens_used,
        generated_at=datetime.now().astimezone(),
    )


@router.get("/{session_id}/summary")
async def get_summary_config(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    config: AIConfig = Depends(get_ai_config),
):
    """Current generation mode for the session's summary panel."""
    session = await SessionService(db).get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return {
        "mode": config.mode.value,
        "model": config.model,
        "session_id": session_id,
        "has_notes": bool(session.notes.subjective),
    }
