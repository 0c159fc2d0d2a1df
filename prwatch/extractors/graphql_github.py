import os
from typing import Optional

import requests

from prwatch.errors import ConfigError, FetchError
from prwatch.logging import get_logger
from prwatch.models import RepoPage
from prwatch.validators.schema import validate_page


GRAPHQL_URL = "https://api.github.com/graphql"
CLOSING_ISSUES_LIMIT = 100
log = get_logger(__name__)

ISSUE_FIELDS = """
fragment IssueFields on Issue {
  title
  number
  closed
  url
  createdAt
  closedAt
}
"""

# PR nodes repeat the issue fields by hand since IssueFields is typed on Issue
REPO_PULL_REQUESTS_QUERY = ISSUE_FIELDS + """
query($repoOwner: String!, $repoName: String!, $pageSize: Int!, $prCursor: String) {
  repository(owner: $repoOwner, name: $repoName) {
    description
    url
    pullRequests(first: $pageSize, after: $prCursor, states: OPEN) {
      nodes {
        title
        number
        closed
        url
        createdAt
        closedAt
        closingIssuesReferences(last: %d) {
          nodes {
            ...IssueFields
          }
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
""" % CLOSING_ISSUES_LIMIT


def read_token(token_env: str = "GITHUB_TOKEN") -> str:
    tok = os.getenv(token_env)
    if not tok:
        raise ConfigError(f"missing environment variable {token_env}")
    return tok


def _headers(token: str, user_agent: str) -> dict:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "User-Agent": user_agent,
    }


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or "")[:300]
    if isinstance(body, dict):
        return str(body.get("message") or body)
    return str(body)[:300]


def fetch_page(owner: str, name: str, cursor: Optional[str], page_size: int, *, token: str,
               url: str = GRAPHQL_URL, timeout: float = 30, user_agent: str = "prwatch") -> RepoPage:
    """Run the pull-request query once and return the validated page.

    Any transport failure, HTTP error status, GraphQL error list or payload
    that does not match the query is raised as FetchError. Nothing is retried.
    """
    variables = {
        "repoOwner": owner,
        "repoName": name,
        "pageSize": page_size,
        "prCursor": cursor,
    }
    try:
        resp = requests.post(
            url,
            json={"query": REPO_PULL_REQUESTS_QUERY, "variables": variables},
            headers=_headers(token, user_agent),
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise FetchError(f"request to {url} failed: {exc}") from exc

    if resp.status_code != 200:
        msg = _error_message(resp)
        log.error("HTTP %s for %s: %s", resp.status_code, url, msg)
        raise FetchError(f"HTTP {resp.status_code} from {url}: {msg}")

    try:
        body = resp.json()
    except ValueError as exc:
        raise FetchError(f"response from {url} is not JSON") from exc
    if not isinstance(body, dict):
        raise FetchError(f"response from {url} is not a JSON object")

    if body.get("errors"):
        messages = ", ".join(
            str(err.get("message")) for err in body["errors"] if isinstance(err, dict)
        )
        raise FetchError(f"GraphQL error: {messages or body['errors']}")
    return validate_page(body.get("data") or {})


def make_fetcher(options: dict, token: str):
    """Bind connection options so the result matches the paginate() fetch signature."""
    url = options.get("graphql_url", GRAPHQL_URL)
    timeout = options.get("request_timeout", 30)
    user_agent = options.get("user_agent", "prwatch")

    def fetch(owner, name, cursor, page_size):
        return fetch_page(owner, name, cursor, page_size, token=token,
                          url=url, timeout=timeout, user_agent=user_agent)

    return fetch
