"""
Patient Insight API Endpoints

Generate, save, fetch and discard cross-session insights for a patient.
Generated insights are transient until saved.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from insight_engine.config import AIConfig, get_ai_config
from insight_engine.database import get_db
from insight_engine.insights.generator import InsightPipeline
from insight_engine.schemas.insights import PatientInsights
from insight_engine.services.insights_store import InsightStore
from insight_engine.services.session_service import SessionService

router = APIRouter(prefix="/patients", tags=["insights"])


@router.post("/{patient_id}/insights", response_model=PatientInsights)
async def generate_insights(
    patient_id: str,
    db: AsyncSession = Depends(get_db),
    config: AIConfig = Depends(get_ai_config),
):
    """Generate insights from the patient's completed sessions (not saved)."""
    pipeline = InsightPipeline(SessionService(db), config)
    return await pipeline.generate(patient_id)


@router.get("/{patient_id}/insights", response_model=PatientInsights)
async def get_saved_insights(
    patient_id: str,
    db: AsyncSession = Depends(get_db),
):
    insights = await InsightStore(db).find_by_patient_id(patient_id)
    if not insights:
        raise HTTPException(status_code=404, detail="No saved insights for patient")
    return insights


@router.put("/{patient_id}/insights", response_model=PatientInsights)
async def save_insights(
    patient_id: str,
    insights: PatientInsights,
    db: AsyncSession = Depends(get_db),
):
    """Save insights for the patient, replacing any previously saved set."""
    if insights.patient_id != patient_id:
        raise HTTPException(status_code=400, detail="Insights belong to a different patient")
    return await InsightStore(db).save_for_patient(insights)


@router.delete("/{patient_id}/insights", status_code=204)
async def delete_insights(
    patient_id: str,
    db: AsyncSession = Depends(get_db),
):
    await InsightStore(db).delete_by_patient_id(patient_id)
    return Response(status_code=204)
