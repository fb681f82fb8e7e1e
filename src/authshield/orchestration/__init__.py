"""Orchestration - unified risk evaluation."""

from authshield.orchestration.risk_flow import RiskEvaluationFlow

__all__ = ["RiskEvaluationFlow"]
