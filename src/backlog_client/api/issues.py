from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import Field

from ..encoding import Pairs, ParamList
from ..identifiers import IssueIdOrKey
from ..models import Attachment, Comment, CountResponse, Issue, User
from ..request import (
    ApiRequest,
    CalendarDate,
    Count,
    DownloadRequest,
    HttpMethod,
    SinceTimestamp,
    SortOrder,
    UntilTimestamp,
)

# A custom field value on an issue: a scalar, or item ids for
# multiple-list and checkbox fields.
CustomFieldInput = Union[bool, int, float, date, str, List[int]]


class ParentChildCondition(IntEnum):
    ALL = 0
    EXCLUDE_CHILD_ISSUE = 1
    CHILD_ISSUE = 2
    NEITHER_PARENT_NOR_CHILD = 3
    PARENT_ISSUE = 4


class IssueScoped(ApiRequest):
    """Operations under /api/v2/issues/{issueIdOrKey}."""

    issue: IssueIdOrKey

    def issue_path(self, *parts: Any) -> str:
        path = f"/api/v2/issues/{self.issue.to_path_segment()}"
        for part in parts:
            path += f"/{part}"
        return path


class IssueFilter(ApiRequest):
    """Filters shared by the issue list and issue count."""

    project_ids: Optional[List[int]] = None
    issue_type_ids: Optional[List[int]] = None
    category_ids: Optional[List[int]] = None
    milestone_ids: Optional[List[int]] = None
    status_ids: Optional[List[int]] = None
    priority_ids: Optional[List[int]] = None
    assignee_ids: Optional[List[int]] = None
    created_user_ids: Optional[List[int]] = None
    resolution_ids: Optional[List[int]] = None
    parent_issue_ids: Optional[List[int]] = None
    ids: Optional[List[int]] = None
    keyword: Optional[str] = None
    attachment: Optional[bool] = None
    shared_file: Optional[bool] = None
    parent_child: Optional[ParentChildCondition] = None
    created_since: Optional[CalendarDate] = None
    created_until: Optional[CalendarDate] = None
    updated_since: Optional[CalendarDate] = None
    updated_until: Optional[CalendarDate] = None
    start_date_since: Optional[SinceTimestamp] = None
    start_date_until: Optional[UntilTimestamp] = None
    due_date_since: Optional[SinceTimestamp] = None
    due_date_until: Optional[UntilTimestamp] = None

    def filter_params(self) -> ParamList:
        return (
            ParamList()
            .add_array("projectId", self.project_ids)
            .add_array("issueTypeId", self.issue_type_ids)
            .add_array("categoryId", self.category_ids)
            .add_array("milestoneId", self.milestone_ids)
            .add_array("statusId", self.status_ids)
            .add_array("priorityId", self.priority_ids)
            .add_array("assigneeId", self.assignee_ids)
            .add_array("createdUserId", self.created_user_ids)
            .add_array("resolutionId", self.resolution_ids)
            .add_array("parentIssueId", self.parent_issue_ids)
            .add_array("id", self.ids)
            .add("keyword", self.keyword)
            .add("attachment", self.attachment)
            .add("sharedFile", self.shared_file)
            .add("parentChild", self.parent_child)
            .add("createdSince", self.created_since)
            .add("createdUntil", self.created_until)
            .add("updatedSince", self.updated_since)
            .add("updatedUntil", self.updated_until)
            .add("startDateSince", self.start_date_since)
            .add("startDateUntil", self.start_date_until)
            .add("dueDateSince", self.due_date_since)
            .add("dueDateUntil", self.due_date_until)
        )

    def path(self) -> str:
        return "/api/v2/issues"

    def to_query(self) -> Pairs:
        return self.filter_params().pairs()


class GetIssueListParams(IssueFilter):
    response_type: ClassVar[Any] = List[Issue]

    # Backlog sort keys ("updated", "dueDate", "customField_12", ...).
    sort: Optional[str] = None
    order: Optional[SortOrder] = None
    offset: Optional[int] = Field(default=None, ge=0)
    count: Optional[Count] = None

    def to_query(self) -> Pairs:
        return (
            self.filter_params()
            .add("sort", self.sort)
            .add("order", self.order)
            .add("offset", self.offset)
            .add("count", self.count)
            .pairs()
        )


class CountIssueParams(IssueFilter):
    response_type: ClassVar[Any] = CountResponse

    def path(self) -> str:
        return "/api/v2/issues/count"


class GetIssueParams(IssueScoped):
    response_type: ClassVar[Any] = Issue

    def path(self) -> str:
        return self.issue_path()


def _add_custom_fields(
    params: ParamList,
    values: Optional[Dict[int, CustomFieldInput]],
    other_values: Optional[Dict[int, str]],
) -> ParamList:
    # List values repeat the bare key, without "[]".
    for field_id, value in (values or {}).items():
        key = f"customField_{field_id}"
        if isinstance(value, list):
            for item in value:
                params.add(key, item)
        else:
            params.add(key, value)
    for field_id, other in (other_values or {}).items():
        params.add(f"customField_{field_id}_otherValue", other)
    return params


class AddIssueParams(ApiRequest):
    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = Issue

    project_id: int = Field(gt=0)
    summary: str
    issue_type_id: int = Field(gt=0)
    priority_id: int = Field(gt=0)
    parent_issue_id: Optional[int] = None
    description: Optional[str] = None
    start_date: Optional[CalendarDate] = None
    due_date: Optional[CalendarDate] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    category_ids: Optional[List[int]] = None
    version_ids: Optional[List[int]] = None
    milestone_ids: Optional[List[int]] = None
    assignee_id: Optional[int] = None
    notified_user_ids: Optional[List[int]] = None
    attachment_ids: Optional[List[int]] = None
    custom_fields: Optional[Dict[int, CustomFieldInput]] = None
    custom_field_other_values: Optional[Dict[int, str]] = None

    def path(self) -> str:
        return "/api/v2/issues"

    def to_form(self) -> Pairs:
        params = (
            ParamList()
            .add("projectId", self.project_id)
            .add("summary", self.summary)
            .add("parentIssueId", self.parent_issue_id)
            .add("description", self.description)
            .add("startDate", self.start_date)
            .add("dueDate", self.due_date)
            .add("estimatedHours", self.estimated_hours)
            .add("actualHours", self.actual_hours)
            .add("issueTypeId", self.issue_type_id)
            .add_array("categoryId", self.category_ids)
            .add_array("versionId", self.version_ids)
            .add_array("milestoneId", self.milestone_ids)
            .add("priorityId", self.priority_id)
            .add("assigneeId", self.assignee_id)
            .add_array("notifiedUserId", self.notified_user_ids)
            .add_array("attachmentId", self.attachment_ids)
        )
        return _add_custom_fields(
            params, self.custom_fields, self.custom_field_other_values
        ).pairs()


class UpdateIssueParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = Issue

    summary: Optional[str] = None
    parent_issue_id: Optional[int] = None
    description: Optional[str] = None
    status_id: Optional[int] = None
    resolution_id: Optional[int] = None
    start_date: Optional[CalendarDate] = None
    due_date: Optional[CalendarDate] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    issue_type_id: Optional[int] = None
    category_ids: Optional[List[int]] = None
    version_ids: Optional[List[int]] = None
    milestone_ids: Optional[List[int]] = None
    priority_id: Optional[int] = None
    assignee_id: Optional[int] = None
    notified_user_ids: Optional[List[int]] = None
    attachment_ids: Optional[List[int]] = None
    comment: Optional[str] = None
    custom_fields: Optional[Dict[int, CustomFieldInput]] = None
    custom_field_other_values: Optional[Dict[int, str]] = None

    def path(self) -> str:
        return self.issue_path()

    def to_form(self) -> Pairs:
        params = (
            ParamList()
            .add("summary", self.summary)
            .add("parentIssueId", self.parent_issue_id)
            .add("description", self.description)
            .add("statusId", self.status_id)
            .add("resolutionId", self.resolution_id)
            .add("startDate", self.start_date)
            .add("dueDate", self.due_date)
            .add("estimatedHours", self.estimated_hours)
            .add("actualHours", self.actual_hours)
            .add("issueTypeId", self.issue_type_id)
            .add_array("categoryId", self.category_ids)
            .add_array("versionId", self.version_ids)
            .add_array("milestoneId", self.milestone_ids)
            .add("priorityId", self.priority_id)
            .add("assigneeId", self.assignee_id)
            .add_array("notifiedUserId", self.notified_user_ids)
            .add_array("attachmentId", self.attachment_ids)
            .add("comment", self.comment)
        )
        return _add_custom_fields(
            params, self.custom_fields, self.custom_field_other_values
        ).pairs()


class DeleteIssueParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = Issue

    def path(self) -> str:
        return self.issue_path()


# --- comments ---


class GetCommentListParams(IssueScoped):
    response_type: ClassVar[Any] = List[Comment]

    min_id: Optional[int] = None
    max_id: Optional[int] = None
    count: Optional[Count] = None
    order: Optional[SortOrder] = None

    def path(self) -> str:
        return self.issue_path("comments")

    def to_query(self) -> Pairs:
        return (
            ParamList()
            .add("minId", self.min_id)
            .add("maxId", self.max_id)
            .add("count", self.count)
            .add("order", self.order)
            .pairs()
        )


class GetCommentParams(IssueScoped):
    response_type: ClassVar[Any] = Comment

    comment_id: int = Field(gt=0)

    def path(self) -> str:
        return self.issue_path("comments", self.comment_id)


class AddCommentParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = Comment

    content: str
    notified_user_ids: Optional[List[int]] = None
    attachment_ids: Optional[List[int]] = None

    def path(self) -> str:
        return self.issue_path("comments")

    def to_form(self) -> Pairs:
        return (
            ParamList()
            .add("content", self.content)
            .add_array("notifiedUserId", self.notified_user_ids)
            .add_array("attachmentId", self.attachment_ids)
            .pairs()
        )


class UpdateCommentParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = Comment

    comment_id: int = Field(gt=0)
    content: str

    def path(self) -> str:
        return self.issue_path("comments", self.comment_id)

    def to_form(self) -> Pairs:
        return ParamList().add("content", self.content).pairs()


class DeleteCommentParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = Comment

    comment_id: int = Field(gt=0)

    def path(self) -> str:
        return self.issue_path("comments", self.comment_id)


# --- attachments and participants ---


class GetAttachmentListParams(IssueScoped):
    response_type: ClassVar[Any] = List[Attachment]

    def path(self) -> str:
        return self.issue_path("attachments")


class GetAttachmentFileParams(IssueScoped, DownloadRequest):
    attachment_id: int = Field(gt=0)

    def path(self) -> str:
        return self.issue_path("attachments", self.attachment_id)


class DeleteAttachmentParams(IssueScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = Attachment

    attachment_id: int = Field(gt=0)

    def path(self) -> str:
        return self.issue_path("attachments", self.attachment_id)


class GetParticipantListParams(IssueScoped):
    response_type: ClassVar[Any] = List[User]

    def path(self) -> str:
        return self.issue_path("participants")


__all__ = [
    "CustomFieldInput",
    "ParentChildCondition",
    "IssueScoped",
    "IssueFilter",
    "GetIssueListParams",
    "CountIssueParams",
    "GetIssueParams",
    "AddIssueParams",
    "UpdateIssueParams",
    "DeleteIssueParams",
    "GetCommentListParams",
    "GetCommentParams",
    "AddCommentParams",
    "UpdateCommentParams",
    "DeleteCommentParams",
    "GetAttachmentListParams",
    "GetAttachmentFileParams",
    "DeleteAttachmentParams",
    "GetParticipantListParams",
]
