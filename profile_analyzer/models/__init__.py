"""Pydantic models for fetched GitHub data, parsed reports and configuration."""
