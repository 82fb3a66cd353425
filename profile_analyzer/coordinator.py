"""
Analysis Coordinator Module

Runs one analysis end to end: fetch → prompt → Gemini → parse → print.
Each stage finishes before the next begins and data only flows forward.
Failures surface as exceptions; deciding whether to exit is left to the CLI.
"""

import uuid
from typing import Any, List, Optional, Tuple

from rich.console import Console

from profile_analyzer.agents.profile_fetcher import ProfileFetcher
from profile_analyzer.agents.report_printer import print_report
from profile_analyzer.agents.response_parser import parse_analysis_response
from profile_analyzer.models.config import AnalyzerConfig
from profile_analyzer.models.github import Profile, RepositorySummary
from profile_analyzer.models.report import AnalysisReport
from profile_analyzer.utils.llm_helpers import (
    GeminiClient,
    build_analysis_prompt,
    request_analysis,
)
from profile_analyzer.utils.logger import get_logger


class AnalysisCoordinator:
    """
    Orchestrates a single profile analysis run.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        console: Optional[Console] = None,
        correlation_id: Optional[str] = None,
        fetcher: Optional[ProfileFetcher] = None,
        gemini: Optional[GeminiClient] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            config: Validated analyzer configuration
            console: Console for user-facing output (defaults to stdout)
            correlation_id: Correlation ID for logging (auto-generated if None)
            fetcher: Optional prebuilt ProfileFetcher
            gemini: Optional prebuilt GeminiClient
        """
        self.config = config
        self.console = console or Console()
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.logger: Any = get_logger(
            __name__,
            correlation_id=self.correlation_id,
            phase="coordinator",
            component="analysis_coordinator",
        )
        self.fetcher = fetcher or ProfileFetcher(
            config, correlation_id=self.correlation_id
        )
        self.gemini = gemini or GeminiClient(config)

        self.logger.info(
            "Analysis coordinator initialized",
            model=config.model,
            repos_per_page=config.repos_per_page,
        )

    def close(self) -> None:
        """Release both HTTP clients."""
        self.fetcher.close()
        self.gemini.close()

    def __enter__(self) -> "AnalysisCoordinator":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def fetch(self, username: str) -> Tuple[Profile, List[RepositorySummary]]:
        return self.fetcher.fetch(username)

    def analyze(
        self, profile: Profile, repos: List[RepositorySummary]
    ) -> Tuple[str, AnalysisReport]:
        """
        Ask Gemini for the assessment and parse it.

        Returns:
            Tuple of (raw response text, parsed report)
        """
        prompt = build_analysis_prompt(
            profile, repos, correlation_id=self.correlation_id
        )
        self.logger.info("Requesting analysis", prompt_length=len(prompt))

        response_text = request_analysis(
            prompt, self.gemini, correlation_id=self.correlation_id
        )
        # Raw reply is always echoed before parsing.
        self.console.print(
            response_text, markup=False, highlight=False, emoji=False, soft_wrap=True
        )

        report = parse_analysis_response(response_text)
        self.logger.info(
            "Analysis parsed",
            strengths=len(report.strengths),
            areas=len(report.areas),
            suggestions=len(report.suggestions),
            tech_stack=len(report.tech_stack),
        )
        return response_text, report

    def run(self, username: str) -> AnalysisReport:
        """
        Analyze one user and print the report.

        Args:
            username: GitHub login

        Returns:
            The parsed report (already printed)

        Raises:
            GitHubFetchError: If fetching the profile or repositories fails
            AnalysisRequestError: If the Gemini call fails or returns no text
        """
        self.console.print(
            f"\nAnalyzing GitHub profile for {username}...",
            markup=False,
            highlight=False,
        )
        self.logger.info("Analysis started", username=username)

        profile, repos = self.fetch(username)
        _, report = self.analyze(profile, repos)
        print_report(profile, report, console=self.console)

        self.logger.info("Analysis complete", username=username)
        return report
