"""Governance - escalation and outward notification of risk results."""
