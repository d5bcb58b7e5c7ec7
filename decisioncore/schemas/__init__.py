"""Pydantic request models for the decision-support operations."""
