"""
Command-line entry point.

Loads credentials, asks for a username and runs one analysis. This is the
only module that terminates the process.
"""

import sys
import uuid
from pathlib import Path
from typing import NoReturn, Optional

from rich.console import Console
from rich.prompt import Prompt

from profile_analyzer.agents.profile_fetcher import GitHubFetchError
from profile_analyzer.coordinator import AnalysisCoordinator
from profile_analyzer.models.config import AnalyzerConfig, ConfigurationError
from profile_analyzer.utils.credential_manager import CredentialManager
from profile_analyzer.utils.llm_helpers import AnalysisRequestError
from profile_analyzer.utils.logger import configure_logging, get_logger

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

console = Console()
error_console = Console(stderr=True)


def validate_username(username: str) -> Optional[str]:
    """Return an error message for an unusable username, or None if it is fine."""
    if not username:
        return "Username cannot be empty. Please try again."
    if " " in username:
        return "Invalid username: GitHub usernames cannot contain spaces."
    return None


def prompt_username(console: Console = console) -> str:
    """Ask for a username until a non-empty one without spaces is entered."""
    console.print("\n=== GitHub Profile Analyzer ===", highlight=False)
    console.print(
        "This tool will analyze any GitHub profile and provide personality insights.",
        highlight=False,
    )

    while True:
        username = Prompt.ask(
            "\nEnter GitHub username to analyze (e.g., torvalds)",
            console=console,
            default="",
            show_default=False,
        ).strip()

        error = validate_username(username)
        if error is None:
            return username
        console.print(error, markup=False, highlight=False)


def load_config(env_file: Path = Path(".env")) -> AnalyzerConfig:
    return AnalyzerConfig.from_env(CredentialManager(env_file=env_file))


def _fail(logger, message: str, error: Exception) -> NoReturn:
    # The one diagnostic line for a fatal error; stages log their detail at debug.
    logger.error(message, error=str(error), error_type=type(error).__name__)
    sys.exit(EXIT_FAILURE)


def main() -> None:
    """CLI entry point."""
    configure_logging()
    correlation_id = str(uuid.uuid4())
    logger = get_logger(
        __name__, correlation_id=correlation_id, phase="cli", component="cli"
    )

    try:
        config = load_config()
    except ConfigurationError as e:
        _fail(logger, "Configuration error", e)

    configure_logging(log_file=config.log_file, log_level=config.log_level)

    try:
        username = prompt_username(console)
        with AnalysisCoordinator(
            config, console=console, correlation_id=correlation_id
        ) as coordinator:
            coordinator.run(username)
    except GitHubFetchError as e:
        _fail(logger, "GitHub request failed", e)
    except AnalysisRequestError as e:
        _fail(logger, "Analysis failed", e)
    except EOFError as e:
        _fail(logger, "No username provided", e)
    except KeyboardInterrupt:
        error_console.print("\nInterrupted.", highlight=False)
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
