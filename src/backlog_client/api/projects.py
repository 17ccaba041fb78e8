from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from pydantic import Field

from ..encoding import Pairs, ParamList
from ..identifiers import ProjectIdOrKey
from ..models import (
    Category,
    IssueType,
    Milestone,
    Priority,
    Project,
    Resolution,
    Status,
    StatusColor,
    TextFormattingRule,
)
from ..request import ApiRequest, DownloadRequest, HttpMethod


class ProjectScoped(ApiRequest):
    """Operations under /api/v2/projects/{projectIdOrKey}."""

    project: ProjectIdOrKey

    def project_path(self, *parts: Any) -> str:
        path = f"/api/v2/projects/{self.project.to_path_segment()}"
        for part in parts:
            path += f"/{part}"
        return path


class GetProjectListParams(ApiRequest):
    response_type: ClassVar[Any] = List[Project]

    archived: Optional[bool] = None
    # Admins only: every project in the space, not just joined ones.
    all: Optional[bool] = None

    def path(self) -> str:
        return "/api/v2/projects"

    def to_query(self) -> Pairs:
        return ParamList().add("archived", self.archived).add("all", self.all).pairs()


class GetProjectParams(ProjectScoped):
    response_type: ClassVar[Any] = Project

    def path(self) -> str:
        return self.project_path()


class UpdateProjectParams(ProjectScoped):
    """Partial update; only given settings are sent."""

    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = Project

    name: Optional[str] = None
    key: Optional[str] = None
    chart_enabled: Optional[bool] = None
    use_resolved_for_chart: Optional[bool] = None
    subtasking_enabled: Optional[bool] = None
    project_leader_can_edit_project_leader: Optional[bool] = None
    use_wiki: Optional[bool] = None
    use_file_sharing: Optional[bool] = None
    use_wiki_tree_view: Optional[bool] = None
    use_subversion: Optional[bool] = None
    use_git: Optional[bool] = None
    use_original_image_size_at_wiki: Optional[bool] = None
    text_formatting_rule: Optional[TextFormattingRule] = None
    archived: Optional[bool] = None
    use_dev_attributes: Optional[bool] = None

    def path(self) -> str:
        return self.project_path()

    def to_form(self) -> Pairs:
        return (
            ParamList()
            .add("name", self.name)
            .add("key", self.key)
            .add("chartEnabled", self.chart_enabled)
            .add("useResolvedForChart", self.use_resolved_for_chart)
            .add("subtaskingEnabled", self.subtasking_enabled)
            .add(
                "projectLeaderCanEditProjectLeader",
                self.project_leader_can_edit_project_leader,
            )
            .add("useWiki", self.use_wiki)
            .add("useFileSharing", self.use_file_sharing)
            .add("useWikiTreeView", self.use_wiki_tree_view)
            .add("useSubversion", self.use_subversion)
            .add("useGit", self.use_git)
            .add("useOriginalImageSizeAtWiki", self.use_original_image_size_at_wiki)
            .add("textFormattingRule", self.text_formatting_rule)
            .add("archived", self.archived)
            .add("useDevAttributes", self.use_dev_attributes)
            .pairs()
        )


class GetProjectIconParams(ProjectScoped, DownloadRequest):
    def path(self) -> str:
        return self.project_path("image")


class GetStatusListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[Status]

    def path(self) -> str:
        return self.project_path("statuses")


class AddStatusParams(ProjectScoped):
    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = Status

    name: str
    color: StatusColor

    def path(self) -> str:
        return self.project_path("statuses")

    def to_form(self) -> Pairs:
        return ParamList().add("name", self.name).add("color", self.color).pairs()


class UpdateStatusParams(ProjectScoped):
    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = Status

    status_id: int = Field(gt=0)
    name: Optional[str] = None
    color: Optional[StatusColor] = None

    def path(self) -> str:
        return self.project_path("statuses", self.status_id)

    def to_form(self) -> Pairs:
        return ParamList().add("name", self.name).add("color", self.color).pairs()


class GetIssueTypeListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[IssueType]

    def path(self) -> str:
        return self.project_path("issueTypes")


class GetCategoryListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[Category]

    def path(self) -> str:
        return self.project_path("categories")


class GetMilestoneListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[Milestone]

    def path(self) -> str:
        return self.project_path("versions")


# Space-wide lists; not scoped to a project.


class GetPriorityListParams(ApiRequest):
    response_type: ClassVar[Any] = List[Priority]

    def path(self) -> str:
        return "/api/v2/priorities"


class GetResolutionListParams(ApiRequest):
    response_type: ClassVar[Any] = List[Resolution]

    def path(self) -> str:
        return "/api/v2/resolutions"


__all__ = [
    "ProjectScoped",
    "GetProjectListParams",
    "GetProjectParams",
    "UpdateProjectParams",
    "GetProjectIconParams",
    "GetStatusListParams",
    "AddStatusParams",
    "UpdateStatusParams",
    "GetIssueTypeListParams",
    "GetCategoryListParams",
    "GetMilestoneListParams",
    "GetPriorityListParams",
    "GetResolutionListParams",
]
