"""Open issues that more than one open pull request would close.

GitHub cannot list the closing PRs of an issue directly (`trackedIssues` mixes
PRs with plain mentions), so the relation is rebuilt from the PR side: every
open closing issue becomes a key mapping to the PRs that reference it.
"""

from prwatch.models import ContestedIssue, RepoPage

MIN_CONTENDERS = 2


def initial_state() -> dict:
    return {}


def on_page(state: dict, page: RepoPage) -> dict:
    for pr in page.repository.pull_requests.nodes:
        pr_issue = None
        for issue in pr.closing_issues:
            if issue.closed:
                continue
            if pr_issue is None:
                pr_issue = pr.as_issue()
            prs = state.setdefault(issue, [])
            if pr_issue not in prs:
                prs.append(pr_issue)
    return state


def finalize(state: dict) -> list[ContestedIssue]:
    contested = [
        ContestedIssue(issue=issue, prs=list(prs))
        for issue, prs in state.items()
        if len(prs) >= MIN_CONTENDERS
    ]
    contested.sort(key=lambda entry: entry.issue.number)
    return contested
