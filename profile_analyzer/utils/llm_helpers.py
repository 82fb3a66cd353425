"""
LLM Helpers Module

Prompt construction and the Gemini generateContent call used to obtain the
free-text personality assessment. All LLM traffic goes through this module.

Example Usage:
    from profile_analyzer.utils.llm_helpers import (
        GeminiClient,
        build_analysis_prompt,
        request_analysis,
    )

    prompt = build_analysis_prompt(profile, repos)
    with GeminiClient(config) as gemini:
        text = request_analysis(prompt, gemini)
"""

from typing import Any, Dict, Optional, Sequence

import httpx
import structlog

from profile_analyzer.models.config import AnalyzerConfig
from profile_analyzer.models.github import Profile, RepositorySummary
from profile_analyzer.utils.prompt_loader import render_prompt

logger = structlog.get_logger(__name__)

ANALYSIS_TEMPLATE = "analysis/personality.j2"
GENERATE_CONTENT_PATH = "/models/{model}:generateContent"
API_KEY_HEADER = "x-goog-api-key"


class AnalysisRequestError(Exception):
    """Raised when the language model call fails or returns no usable text."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def format_repos_for_prompt(repos: Sequence[RepositorySummary]) -> str:
    """Render non-fork repositories as one bullet line each, in input order.

    Args:
        repos: Repositories as returned by the fetcher

    Returns:
        Newline-joined listing, empty string when every repo is a fork
    """
    lines = [
        f"- {repo.name} ({repo.language}): {repo.description} [{repo.stars} stars]"
        for repo in repos
        if not repo.fork
    ]
    return "\n".join(lines)


def build_analysis_prompt(
    profile: Profile,
    repos: Sequence[RepositorySummary],
    correlation_id: Optional[str] = None,
) -> str:
    """Render the personality-assessment prompt.

    The section names requested here are what the response parser later
    looks for, so the template and the parser's header table move together.
    """
    return render_prompt(
        ANALYSIS_TEMPLATE,
        correlation_id=correlation_id,
        profile=profile,
        repo_listing=format_repos_for_prompt(repos),
    )


def extract_response_text(payload: Dict[str, Any]) -> str:
    """
    Concatenate the text parts of the first candidate.

    Args:
        payload: Decoded generateContent response body

    Returns:
        Joined text of every text part, in order

    Raises:
        AnalysisRequestError: If there are no candidates, the first candidate
            is malformed, or it has no text parts
    """
    candidates = payload.get("candidates")
    if not candidates:
        raise AnalysisRequestError("No response received from Gemini")
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise AnalysisRequestError("Malformed Gemini response: unexpected candidates")

    content = candidates[0].get("content") or {}
    if not isinstance(content, dict):
        raise AnalysisRequestError("Malformed Gemini response: unexpected content")
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise AnalysisRequestError("Malformed Gemini response: unexpected parts")

    text = "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    if not text:
        raise AnalysisRequestError("No text content in Gemini response")

    return text


class GeminiClient:
    """Thin synchronous client for the Gemini generateContent endpoint."""

    def __init__(
        self, config: AnalyzerConfig, client: Optional[httpx.Client] = None
    ):
        """Initialize the client.

        Args:
            config: Analyzer configuration (API key, base URL, model)
            client: Optional preconfigured httpx.Client (used by tests)
        """
        self.config = config
        self.model = config.model
        # No timeout at this layer; the transport decides.
        self._client = client or httpx.Client(timeout=None)

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def endpoint(self) -> str:
        return self.config.gemini_api_url + GENERATE_CONTENT_PATH.format(
            model=self.model
        )

    def generate(self, prompt: str, correlation_id: Optional[str] = None) -> str:
        """
        Send a single text prompt and return the first candidate's text.

        Args:
            prompt: Prompt text
            correlation_id: Optional correlation ID for logging

        Returns:
            Concatenated text of the first candidate

        Raises:
            AnalysisRequestError: On transport failure, non-2xx status,
                undecodable body, no candidates or no text
        """
        log = logger.bind(correlation_id=correlation_id, model=self.model)
        log.debug("LLM call initiated", prompt_length=len(prompt))

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._client.post(
                self.endpoint,
                json=body,
                headers={API_KEY_HEADER: self.config.gemini_api_key},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.debug("LLM call failed", error=str(e), error_type=type(e).__name__)
            raise AnalysisRequestError(f"Error generating analysis: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            log.debug(
                "LLM call rejected", status_code=response.status_code, error=message
            )
            raise AnalysisRequestError(
                f"Error generating analysis: {response.status_code} {message}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            log.debug("LLM response is not JSON", error=str(e))
            raise AnalysisRequestError(
                f"Error decoding Gemini response: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise AnalysisRequestError("No response received from Gemini")

        text = extract_response_text(payload)
        log.debug("LLM call succeeded", response_length=len(text))
        return text


def _error_message(response: httpx.Response) -> str:
    try:
        error = response.json().get("error", {})
        return str(error.get("message") or response.reason_phrase)
    except (ValueError, AttributeError):
        return response.reason_phrase


def request_analysis(
    prompt: str, gemini: GeminiClient, correlation_id: Optional[str] = None
) -> str:
    """Send the analysis prompt; a single failure aborts, there is no retry."""
    return gemini.generate(prompt, correlation_id=correlation_id)
