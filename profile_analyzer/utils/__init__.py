"""Shared utilities: logging, credentials, prompt templates and LLM helpers."""
