from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from pydantic import Field

from ..encoding import Pairs, ParamList
from ..identifiers import RepositoryIdOrName
from ..models import CountResponse, PullRequest, Repository
from ..request import Count, DownloadRequest
from .projects import ProjectScoped


class GetRepositoryListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[Repository]

    def path(self) -> str:
        return self.project_path("git", "repositories")


class RepositoryScoped(ProjectScoped):
    repository: RepositoryIdOrName

    def repository_path(self, *parts: Any) -> str:
        return self.project_path(
            "git", "repositories", self.repository.to_path_segment(), *parts
        )


class GetRepositoryParams(RepositoryScoped):
    response_type: ClassVar[Any] = Repository

    def path(self) -> str:
        return self.repository_path()


class PullRequestFilter(RepositoryScoped):
    status_ids: Optional[List[int]] = None
    assignee_ids: Optional[List[int]] = None
    issue_ids: Optional[List[int]] = None
    created_user_ids: Optional[List[int]] = None

    def filter_params(self) -> ParamList:
        return (
            ParamList()
            .add_array("statusId", self.status_ids)
            .add_array("assigneeId", self.assignee_ids)
            .add_array("issueId", self.issue_ids)
            .add_array("createdUserId", self.created_user_ids)
        )

    def path(self) -> str:
        return self.repository_path("pullRequests")

    def to_query(self) -> Pairs:
        return self.filter_params().pairs()


class GetPullRequestListParams(PullRequestFilter):
    response_type: ClassVar[Any] = List[PullRequest]

    offset: Optional[int] = Field(default=None, ge=0)
    count: Optional[Count] = None

    def to_query(self) -> Pairs:
        return (
            self.filter_params()
            .add("offset", self.offset)
            .add("count", self.count)
            .pairs()
        )


class GetPullRequestCountParams(PullRequestFilter):
    response_type: ClassVar[Any] = CountResponse

    def path(self) -> str:
        return self.repository_path("pullRequests", "count")


class GetPullRequestAttachmentFileParams(RepositoryScoped, DownloadRequest):
    number: int = Field(gt=0)
    attachment_id: int = Field(gt=0)

    def path(self) -> str:
        return self.repository_path(
            "pullRequests", self.number, "attachments", self.attachment_id
        )


__all__ = [
    "GetRepositoryListParams",
    "RepositoryScoped",
    "GetRepositoryParams",
    "PullRequestFilter",
    "GetPullRequestListParams",
    "GetPullRequestCountParams",
    "GetPullRequestAttachmentFileParams",
]
