from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .custom_fields import ResponseDate


class BacklogModel(BaseModel):
    """
    Base for response models.
    Backlog sends camelCase keys and adds fields over time, so unknown keys
    are ignored and every field is reachable by its snake_case name too.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class StatusColor(str, Enum):
    RED = "#ea2c00"
    CORAL = "#e87758"
    PINK = "#e07b9a"
    LIGHT_PURPLE = "#868cb7"
    BLUE = "#3b9dbd"
    GREEN = "#4caf93"
    LIGHT_GREEN = "#b0be3c"
    ORANGE = "#eda62a"
    MAGENTA = "#f42858"
    DARK_GRAY = "#393939"


class TextFormattingRule(str, Enum):
    BACKLOG = "backlog"
    MARKDOWN = "markdown"


# --- Summary Models (Output) ---


class ProjectSummary(BaseModel):
    id: int
    key: str
    name: str
    archived: bool


class IssueSummary(BaseModel):
    id: int
    key: str
    summary: str
    status: str
    priority: Optional[str]
    assignee: Optional[str]


# --- Core Entities ---


class User(BacklogModel):
    id: int
    user_id: Optional[str] = Field(default=None, alias="userId")
    name: str
    role_type: Optional[int] = Field(default=None, alias="roleType")
    lang: Optional[str] = None
    mail_address: Optional[str] = Field(default=None, alias="mailAddress")
    last_login_time: Optional[datetime] = Field(default=None, alias="lastLoginTime")


class Project(BacklogModel):
    id: int
    project_key: str = Field(alias="projectKey")
    name: str
    chart_enabled: bool = Field(default=False, alias="chartEnabled")
    subtasking_enabled: bool = Field(default=False, alias="subtaskingEnabled")
    text_formatting_rule: Optional[str] = Field(
        default=None, alias="textFormattingRule"
    )
    archived: bool = False
    display_order: int = Field(default=0, alias="displayOrder")

    def to_summary(self) -> ProjectSummary:
        return ProjectSummary(
            id=self.id,
            key=self.project_key,
            name=self.name,
            archived=self.archived,
        )


class Status(BacklogModel):
    id: int
    project_id: Optional[int] = Field(default=None, alias="projectId")
    name: str
    # Built-in statuses may carry colors outside the palette.
    color: Optional[str] = None
    display_order: int = Field(default=0, alias="displayOrder")


class IssueType(BacklogModel):
    id: int
    project_id: Optional[int] = Field(default=None, alias="projectId")
    name: str
    color: Optional[str] = None
    display_order: int = Field(default=0, alias="displayOrder")


class Priority(BacklogModel):
    id: int
    name: str


class Resolution(BacklogModel):
    id: int
    name: str


class Category(BacklogModel):
    id: int
    name: str
    display_order: int = Field(default=0, alias="displayOrder")


class Milestone(BacklogModel):
    id: int
    project_id: Optional[int] = Field(default=None, alias="projectId")
    name: str
    description: Optional[str] = None
    start_date: ResponseDate = Field(default=None, alias="startDate")
    release_due_date: ResponseDate = Field(default=None, alias="releaseDueDate")
    archived: bool = False
    display_order: int = Field(default=0, alias="displayOrder")


class Attachment(BacklogModel):
    id: int
    name: str
    size: int = 0
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None


class SharedFile(BacklogModel):
    id: int
    type: Optional[str] = None
    dir: Optional[str] = None
    name: str
    size: Optional[int] = None


class CustomFieldValue(BacklogModel):
    """A custom field as attached to an issue; `value` is kind-dependent."""

    id: int
    field_type_id: Optional[int] = Field(default=None, alias="fieldTypeId")
    name: str
    value: Any = None


class Issue(BacklogModel):
    id: int
    project_id: int = Field(alias="projectId")
    issue_key: str = Field(alias="issueKey")
    key_id: int = Field(alias="keyId")
    issue_type: IssueType = Field(alias="issueType")
    summary: str
    description: Optional[str] = None
    resolution: Optional[Resolution] = None
    priority: Optional[Priority] = None
    status: Status
    assignee: Optional[User] = None
    category: List[Category] = Field(default_factory=list)
    versions: List[Milestone] = Field(default_factory=list)
    milestone: List[Milestone] = Field(default_factory=list)
    start_date: ResponseDate = Field(default=None, alias="startDate")
    due_date: ResponseDate = Field(default=None, alias="dueDate")
    estimated_hours: Optional[float] = Field(default=None, alias="estimatedHours")
    actual_hours: Optional[float] = Field(default=None, alias="actualHours")
    parent_issue_id: Optional[int] = Field(default=None, alias="parentIssueId")
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated_user: Optional[User] = Field(default=None, alias="updatedUser")
    updated: Optional[datetime] = None
    custom_fields: List[CustomFieldValue] = Field(
        default_factory=list, alias="customFields"
    )
    attachments: List[Attachment] = Field(default_factory=list)
    shared_files: List[SharedFile] = Field(default_factory=list, alias="sharedFiles")

    def custom_field(self, name: str) -> Optional[CustomFieldValue]:
        for value in self.custom_fields:
            if value.name == name:
                return value
        return None

    def to_summary(self) -> IssueSummary:
        return IssueSummary(
            id=self.id,
            key=self.issue_key,
            summary=self.summary,
            status=self.status.name,
            priority=self.priority.name if self.priority else None,
            assignee=self.assignee.name if self.assignee else None,
        )


class ChangeLog(BacklogModel):
    field: str
    new_value: Optional[str] = Field(default=None, alias="newValue")
    original_value: Optional[str] = Field(default=None, alias="originalValue")


class Comment(BacklogModel):
    id: int
    content: Optional[str] = None
    change_log: List[ChangeLog] = Field(default_factory=list, alias="changeLog")
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


class PullRequestStatus(BacklogModel):
    id: int
    name: str


class PullRequest(BacklogModel):
    id: int
    project_id: int = Field(alias="projectId")
    repository_id: int = Field(alias="repositoryId")
    number: int
    summary: str
    description: Optional[str] = None
    base: str
    branch: str
    status: PullRequestStatus
    assignee: Optional[User] = None
    issue: Optional[Issue] = None
    base_commit: Optional[str] = Field(default=None, alias="baseCommit")
    branch_commit: Optional[str] = Field(default=None, alias="branchCommit")
    close_at: Optional[datetime] = Field(default=None, alias="closeAt")
    merge_at: Optional[datetime] = Field(default=None, alias="mergeAt")
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


class NotificationProject(BacklogModel):
    id: int
    project_key: str = Field(alias="projectKey")
    name: str


class Notification(BacklogModel):
    id: int
    already_read: bool = Field(default=False, alias="alreadyRead")
    reason: int
    resource_already_read: bool = Field(default=False, alias="resourceAlreadyRead")
    project: Optional[NotificationProject] = None
    # Issue and pull request payloads here are partial; keep them raw.
    issue: Optional[Any] = None
    comment: Optional[Comment] = None
    pull_request: Optional[Any] = Field(default=None, alias="pullRequest")
    sender: Optional[User] = None
    created: Optional[datetime] = None


class Webhook(BacklogModel):
    id: int
    name: str
    description: Optional[str] = None
    hook_url: str = Field(alias="hookUrl")
    all_event: bool = Field(default=False, alias="allEvent")
    activity_type_ids: List[int] = Field(default_factory=list, alias="activityTypeIds")
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated_user: Optional[User] = Field(default=None, alias="updatedUser")
    updated: Optional[datetime] = None


class Repository(BacklogModel):
    id: int
    project_id: int = Field(alias="projectId")
    name: str
    description: Optional[str] = None
    hook_url: Optional[str] = Field(default=None, alias="hookUrl")
    http_url: Optional[str] = Field(default=None, alias="httpUrl")
    ssh_url: Optional[str] = Field(default=None, alias="sshUrl")
    display_order: int = Field(default=0, alias="displayOrder")
    pushed_at: Optional[datetime] = Field(default=None, alias="pushedAt")
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated: Optional[datetime] = None


class WikiTag(BacklogModel):
    id: int
    name: str


class Wiki(BacklogModel):
    id: int
    project_id: int = Field(alias="projectId")
    name: str
    tags: List[WikiTag] = Field(default_factory=list)
    created_user: Optional[User] = Field(default=None, alias="createdUser")
    created: Optional[datetime] = None
    updated_user: Optional[User] = Field(default=None, alias="updatedUser")
    updated: Optional[datetime] = None


class CountResponse(BacklogModel):
    count: int


__all__ = [
    "BacklogModel",
    "StatusColor",
    "TextFormattingRule",
    "ProjectSummary",
    "IssueSummary",
    "User",
    "Project",
    "Status",
    "IssueType",
    "Priority",
    "Resolution",
    "Category",
    "Milestone",
    "Attachment",
    "SharedFile",
    "CustomFieldValue",
    "Issue",
    "ChangeLog",
    "Comment",
    "PullRequestStatus",
    "PullRequest",
    "NotificationProject",
    "Notification",
    "Webhook",
    "Repository",
    "WikiTag",
    "Wiki",
    "CountResponse",
]
