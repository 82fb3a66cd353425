"""
Integration Test Configuration

Provides fixtures for end-to-end runs over mocked GitHub and Gemini transports.
When running in CI environment (CI=true), slow tests are automatically skipped.
"""

import os

import pytest

from profile_analyzer.models.config import AnalyzerConfig


@pytest.fixture
def is_ci_environment() -> bool:
    """
    Detect if tests are running in CI environment.

    Returns:
        True if CI environment variable is set to 'true'
    """
    return os.getenv("CI", "").lower() == "true"


@pytest.fixture(autouse=True)
def skip_slow_tests_in_ci(request, is_ci_environment):
    """
    Automatically skip slow integration tests when running in CI.

    Args:
        request: pytest request fixture
        is_ci_environment: Fixture indicating CI environment
    """
    if is_ci_environment and request.node.get_closest_marker("slow"):
        pytest.skip("Skipping slow test in CI environment")


@pytest.fixture
def analyzer_config() -> AnalyzerConfig:
    return AnalyzerConfig(
        github_token="ghp_integration",
        gemini_api_key="gm-integration",
        model="gemini-1.5-flash",
        repos_per_page=5,
    )
