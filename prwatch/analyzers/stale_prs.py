"""Open pull requests whose closing issues are already all closed."""

from prwatch.models import RepoPage, StalePR


def initial_state() -> list:
    return []


def on_page(state: list, page: RepoPage) -> list:
    for pr in page.repository.pull_requests.nodes:
        # no closing issues means no signal, not "vacuously stale"
        if not pr.closing_issues:
            continue
        closed = [issue for issue in pr.closing_issues if issue.closed]
        if len(closed) == len(pr.closing_issues):
            state.append(StalePR(pr=pr.as_issue(), closed_issues=closed))
    return state


def finalize(state: list) -> list[StalePR]:
    return list(state)
