from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator
from typing import Optional
from datetime import datetime


class Issue(BaseModel):
    """A GitHub issue or pull request; GitHub gives both the same shape.

    Identity is the issue number alone, so the same issue seen on different
    pages collapses to one dict key even if its title was edited in between.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    number: PositiveInt
    closed: bool
    url: str
    created_at: datetime = Field(alias="createdAt")
    closed_at: Optional[datetime] = Field(default=None, alias="closedAt")

    def __eq__(self, other):
        if not isinstance(other, Issue):
            return NotImplemented
        return self.number == other.number

    def __hash__(self):
        return hash(self.number)


class PullRequest(Issue):
    # closingIssuesReferences(last: 100) is not paginated, longer lists are truncated
    closing_issues: list[Issue] = Field(default_factory=list, alias="closingIssuesReferences")

    @field_validator("closing_issues", mode="before")
    @classmethod
    def _unwrap_nodes(cls, value):
        if isinstance(value, dict):
            return value.get("nodes") or []
        return value or []

    def as_issue(self) -> Issue:
        return Issue.model_validate(self.model_dump(exclude={"closing_issues"}))


class PageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    end_cursor: Optional[str] = Field(default=None, alias="endCursor")
    has_next_page: bool = Field(alias="hasNextPage")

    @model_validator(mode="after")
    def _cursor_for_next_page(self):
        # a null cursor would restart pagination from the first page
        if self.has_next_page and not self.end_cursor:
            raise ValueError("hasNextPage is true but endCursor is missing")
        return self


class PullRequestConnection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    nodes: list[PullRequest] = Field(default_factory=list)
    page_info: PageInfo = Field(alias="pageInfo")


class Repository(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    url: str
    pull_requests: PullRequestConnection = Field(alias="pullRequests")

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value):
        return value or ""


class RepoPage(BaseModel):
    repository: Repository


class StalePR(BaseModel):
    pr: Issue
    closed_issues: list[Issue]


class ContestedIssue(BaseModel):
    issue: Issue
    prs: list[Issue]
