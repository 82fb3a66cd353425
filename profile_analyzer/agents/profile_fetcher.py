"""GitHub profile fetcher.

Two sequential, authenticated GETs: the user record, then the most recently
updated repositories (a single page, no pagination).
"""

from typing import Any, List, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from profile_analyzer.models.config import AnalyzerConfig
from profile_analyzer.models.github import Profile, RepositorySummary
from profile_analyzer.utils.logger import get_logger

GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
USER_ENDPOINT_TEMPLATE = "/users/{username}"
REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"

_repo_list_adapter = TypeAdapter(List[RepositorySummary])


class GitHubFetchError(Exception):
    """Raised when a GitHub request fails or its body cannot be decoded."""

    pass


class GitHubAPIError(GitHubFetchError):
    """Raised when the user lookup returns a status other than 200."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"GitHub API error: {status_code} {reason}")


class ProfileFetcher:
    """Fetches a user's profile and recent repositories."""

    def __init__(
        self,
        config: AnalyzerConfig,
        correlation_id: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Analyzer configuration (token, API URL, timeout, page size)
            correlation_id: Unique ID for tracing this run
            client: Optional preconfigured httpx.Client (used by tests)
        """
        self.config = config
        self.correlation_id = correlation_id
        self.logger: Any = get_logger(
            __name__,
            correlation_id=correlation_id,
            phase="fetch",
            component="profile_fetcher",
        )
        self._client = client or httpx.Client(
            base_url=config.github_api_url,
            timeout=config.request_timeout,
        )

    def __enter__(self) -> "ProfileFetcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.config.github_token}",
            "Accept": GITHUB_ACCEPT_HEADER,
        }

    def fetch(self, username: str) -> Tuple[Profile, List[RepositorySummary]]:
        """Fetch the profile, then the repositories.

        Args:
            username: GitHub login to analyze

        Returns:
            Tuple of (profile, repositories most-recently-updated first)

        Raises:
            GitHubAPIError: If the user lookup does not return 200
            GitHubFetchError: On transport failure or undecodable JSON
        """
        profile = self.fetch_profile(username)
        repos = self.fetch_repositories(username)
        return profile, repos

    def fetch_profile(self, username: str) -> Profile:
        response = self._get(
            USER_ENDPOINT_TEMPLATE.format(username=username),
            what="user data",
        )

        if response.status_code != httpx.codes.OK:
            self.logger.debug(
                "User lookup failed",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubAPIError(response.status_code, response.reason_phrase)

        data = self._decode(response, what="user data")
        try:
            profile = Profile.model_validate(data)
        except ValidationError as e:
            raise GitHubFetchError(f"Error decoding user data: {e}") from e

        self.logger.info(
            "Profile fetched",
            username=username,
            public_repos=profile.public_repos,
        )
        return profile

    def fetch_repositories(self, username: str) -> List[RepositorySummary]:
        # The status of this call is not checked; a non-array body fails decoding.
        response = self._get(
            REPOS_ENDPOINT_TEMPLATE.format(username=username),
            what="repositories",
            params={"sort": "updated", "per_page": self.config.repos_per_page},
        )

        data = self._decode(response, what="repository data")
        try:
            repos = _repo_list_adapter.validate_python(data)
        except ValidationError as e:
            raise GitHubFetchError(f"Error decoding repository data: {e}") from e

        self.logger.info(
            "Repositories fetched",
            username=username,
            repo_count=len(repos),
            fork_count=sum(1 for repo in repos if repo.fork),
        )
        return repos

    def _get(
        self, path: str, what: str, params: Optional[dict] = None
    ) -> httpx.Response:
        self.logger.debug("GitHub request", path=path, params=params)
        try:
            return self._client.get(path, params=params, headers=self.headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.debug(
                "GitHub request failed",
                path=path,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise GitHubFetchError(f"Error fetching {what}: {e}") from e

    def _decode(self, response: httpx.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            self.logger.debug("Invalid JSON from GitHub", what=what, error=str(e))
            raise GitHubFetchError(f"Error decoding {what}: {e}") from e
