from prwatch.models import ContestedIssue, Issue, Repository, StalePR

STALE_PRS_TITLE = "List of open PRs whose closing issues are already all closed"
CONTESTED_ISSUES_TITLE = "List of open issues with multiple open closing PRs."


def _link(kind: str, issue: Issue) -> str:
    return f"{kind} [#{issue.number}]({issue.url}) {issue.title}"


def _header(repository: Repository, title: str) -> list[str]:
    lines = ["", f"Repo: {repository.url}"]
    if repository.description:
        lines.append(f"Description: {repository.description}")
    lines += [title, ""]
    return lines


def _render(repository: Repository, title: str, rows) -> str:
    lines = _header(repository, title)
    for i, (head, children) in enumerate(rows, start=1):
        lines.append(f"{i}. {head}")
        lines.extend(f"  - {child}" for child in children)
        lines.append("")
    return "\n".join(lines)


def render_stale_prs(repository: Repository, entries: list[StalePR]) -> str:
    rows = (
        (_link("PR", e.pr), [_link("issue", i) for i in e.closed_issues])
        for e in entries
    )
    return _render(repository, STALE_PRS_TITLE, rows)


def render_contested_issues(repository: Repository, entries: list[ContestedIssue]) -> str:
    rows = (
        (_link("Issue", e.issue), [_link("PR", pr) for pr in e.prs])
        for e in entries
    )
    return _render(repository, CONTESTED_ISSUES_TITLE, rows)
