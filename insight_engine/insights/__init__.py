"""
Patient Insights

Cross-session insight generation: patterns, progress trends, risk
indicators and treatment gaps drawn from a patient's session history.
"""

from insight_engine.insights.aggregator import SessionAggregator, SessionSource
from insight_engine.insights.formatter import format_sessions
from insight_engine.insights.generator import InsightPipeline, generate_patient_insights

__all__ = [
    "SessionAggregator",
    "SessionSource",
    "format_sessions",
    "InsightPipeline",
    "generate_patient_insights",
]
