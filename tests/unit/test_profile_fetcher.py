"""
Unit tests for the GitHub profile fetcher.
"""

from datetime import datetime, timezone

import httpx
import pytest

from profile_analyzer.agents.profile_fetcher import (
    GitHubAPIError,
    GitHubFetchError,
    ProfileFetcher,
)
from profile_analyzer.models.config import AnalyzerConfig

USER_PAYLOAD = {
    "login": "octocat",
    "id": 583231,
    "name": "The Octocat",
    "company": "@github",
    "blog": "https://github.blog",
    "location": "San Francisco",
    "email": None,
    "bio": None,
    "public_repos": 8,
    "followers": 17000,
    "following": 9,
    "created_at": "2011-01-25T18:44:36Z",
    "updated_at": "2024-06-22T11:23:19Z",
}

REPOS_PAYLOAD = [
    {
        "name": "Hello-World",
        "description": "My first repository on GitHub!",
        "language": None,
        "stargazers_count": 2500,
        "fork": False,
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2024-07-01T08:00:00Z",
    },
    {
        "name": "linguist",
        "description": None,
        "language": "Ruby",
        "stargazers_count": 150,
        "fork": True,
        "created_at": "2016-05-10T12:00:00Z",
        "updated_at": "2024-06-30T08:00:00Z",
    },
]


@pytest.fixture
def config():
    return AnalyzerConfig(github_token="ghp_test_token", gemini_api_key="gm-key")


def make_fetcher(config, handler) -> ProfileFetcher:
    client = httpx.Client(
        base_url=config.github_api_url,
        transport=httpx.MockTransport(handler),
    )
    return ProfileFetcher(config, correlation_id="test-run", client=client)


def github_handler(user_status=200, user_body=None, repos_body=None, requests=None):
    """Serve the two GitHub endpoints, recording every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if request.url.path == "/users/octocat":
            if user_body is not None:
                return httpx.Response(user_status, content=user_body)
            return httpx.Response(user_status, json=USER_PAYLOAD)
        if request.url.path == "/users/octocat/repos":
            if repos_body is not None:
                return httpx.Response(200, content=repos_body)
            return httpx.Response(200, json=REPOS_PAYLOAD)
        return httpx.Response(404, json={"message": "Not Found"})

    return handler


class TestFetchSuccess:
    """Test cases for successful fetches."""

    def test_fetch_decodes_profile_and_repositories(self, config):
        """Test both payloads decode into typed records."""
        # Arrange
        fetcher = make_fetcher(config, github_handler())

        # Act
        profile, repos = fetcher.fetch("octocat")

        # Assert
        assert profile.login == "octocat"
        assert profile.name == "The Octocat"
        assert profile.bio == ""
        assert profile.followers == 17000
        assert profile.public_repos == 8
        assert profile.created_at == datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc)
        assert [repo.name for repo in repos] == ["Hello-World", "linguist"]
        assert repos[0].language == ""
        assert repos[0].stars == 2500
        assert repos[1].description == ""
        assert repos[1].fork is True

    def test_requests_are_sequential_and_authenticated(self, config):
        """Test user lookup precedes the repo listing and both carry auth headers."""
        requests = []
        fetcher = make_fetcher(config, github_handler(requests=requests))

        fetcher.fetch("octocat")

        assert [r.url.path for r in requests] == [
            "/users/octocat",
            "/users/octocat/repos",
        ]
        for request in requests:
            assert request.headers["Authorization"] == "Bearer ghp_test_token"
            assert request.headers["Accept"] == "application/vnd.github.v3+json"

    def test_repository_query_is_single_page_sorted_by_update(self, config):
        requests = []
        fetcher = make_fetcher(config, github_handler(requests=requests))

        fetcher.fetch("octocat")

        params = requests[1].url.params
        assert params["sort"] == "updated"
        assert params["per_page"] == "15"
        assert "page" not in params

    def test_default_client_uses_configured_timeout(self, config):
        fetcher = ProfileFetcher(config)

        assert fetcher._client.timeout == httpx.Timeout(10.0)
        assert str(fetcher._client.base_url).rstrip("/") == "https://api.github.com"
        fetcher.close()


class TestFetchFailures:
    """Test cases for fatal fetch conditions."""

    @pytest.mark.parametrize("status", [401, 403, 404, 500])
    def test_non_ok_user_status_raises_api_error(self, config, status):
        """Test any user lookup status other than 200 is an error."""
        requests = []
        fetcher = make_fetcher(
            config, github_handler(user_status=status, requests=requests)
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            fetcher.fetch("octocat")

        assert exc_info.value.status_code == status
        assert str(status) in str(exc_info.value)
        # Repositories are never requested after a failed lookup.
        assert len(requests) == 1

    def test_api_error_is_a_fetch_error(self):
        assert issubclass(GitHubAPIError, GitHubFetchError)

    def test_invalid_user_json_raises(self, config):
        fetcher = make_fetcher(config, github_handler(user_body=b"{not json"))

        with pytest.raises(GitHubFetchError, match="decoding user data"):
            fetcher.fetch("octocat")

    def test_invalid_repository_json_raises(self, config):
        fetcher = make_fetcher(config, github_handler(repos_body=b"<html>"))

        with pytest.raises(GitHubFetchError, match="decoding repository data"):
            fetcher.fetch("octocat")

    def test_repository_object_instead_of_array_raises(self, config):
        """Test an error object where an array is expected fails decoding."""
        fetcher = make_fetcher(
            config, github_handler(repos_body=b'{"message": "Server Error"}')
        )

        with pytest.raises(GitHubFetchError, match="decoding repository data"):
            fetcher.fetch("octocat")

    def test_transport_error_raises(self, config):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        fetcher = make_fetcher(config, handler)

        with pytest.raises(GitHubFetchError, match="Error fetching user data"):
            fetcher.fetch("octocat")

    def test_transport_error_on_repositories(self, config):
        def handler(request):
            if request.url.path.endswith("/repos"):
                raise httpx.ReadError("connection reset", request=request)
            return httpx.Response(200, json=USER_PAYLOAD)

        fetcher = make_fetcher(config, handler)

        with pytest.raises(GitHubFetchError, match="Error fetching repositories"):
            fetcher.fetch("octocat")

    def test_unbuildable_request_url_raises(self, config):
        """Test a username the URL parser rejects fails as a fetch error."""
        requests = []
        fetcher = make_fetcher(config, github_handler(requests=requests))

        with pytest.raises(GitHubFetchError, match="Error fetching user data"):
            fetcher.fetch("a\tb")

        assert requests == []
