from datetime import date

import pytest
from backlog_client.api.issues import (
    AddCommentParams,
    AddIssueParams,
    CountIssueParams,
    DeleteAttachmentParams,
    GetAttachmentFileParams,
    GetCommentListParams,
    GetIssueListParams,
    GetIssueParams,
    GetParticipantListParams,
    ParentChildCondition,
    UpdateCommentParams,
    UpdateIssueParams,
)
from backlog_client.errors import (
    BacklogClientError,
    InvalidDateError,
    InvalidIdentifierError,
    InvalidParameterError,
)
from backlog_client.request import DownloadRequest, HttpMethod, SortOrder


def test_single_day_range_covers_whole_day():
    params = GetIssueListParams(
        start_date_since="2024-03-14", start_date_until="2024-03-14"
    )
    assert params.to_query() == [
        ("startDateSince", "2024-03-14T00:00:00Z"),
        ("startDateUntil", "2024-03-14T23:59:59Z"),
    ]


def test_due_date_bounds_accept_explicit_timestamps():
    params = GetIssueListParams(due_date_until="2024-03-14T09:00:00+09:00")
    assert params.to_query() == [("dueDateUntil", "2024-03-14T00:00:00Z")]


def test_invalid_date_rejected_before_request():
    with pytest.raises(InvalidDateError):
        GetIssueListParams(created_since="yesterday-ish")


def test_invalid_sort_order_rejected_before_request():
    with pytest.raises(InvalidParameterError) as exc:
        GetIssueListParams(order="up")
    assert isinstance(exc.value, BacklogClientError)
    assert "order" in str(exc.value)

    with pytest.raises(InvalidParameterError):
        GetIssueListParams(offset=-1)


def test_issue_list_filters_and_paging():
    params = GetIssueListParams(
        project_ids=[10],
        status_ids=[1, 2],
        keyword="login",
        attachment=True,
        parent_child=ParentChildCondition.CHILD_ISSUE,
        created_since=date(2024, 3, 1),
        sort="updated",
        order=SortOrder.DESC,
        offset=20,
        count=500,
    )
    spec = params.to_request_spec()

    assert spec.method is HttpMethod.GET
    assert spec.path == "/api/v2/issues"
    assert spec.form is None
    assert spec.query == [
        ("projectId[]", "10"),
        ("statusId[]", "1"),
        ("statusId[]", "2"),
        ("keyword", "login"),
        ("attachment", "true"),
        ("parentChild", "2"),
        ("createdSince", "2024-03-01"),
        ("sort", "updated"),
        ("order", "desc"),
        ("offset", "20"),
        ("count", "100"),
    ]


def test_count_is_clamped_low():
    assert GetIssueListParams(count=0).to_query() == [("count", "1")]


def test_count_issue_shares_filters():
    spec = CountIssueParams(assignee_ids=[5], ids=[1001]).to_request_spec()
    assert spec.path == "/api/v2/issues/count"
    assert spec.query == [("assigneeId[]", "5"), ("id[]", "1001")]


def test_get_issue_by_key_or_id():
    assert GetIssueParams(issue="PROJ-12").path() == "/api/v2/issues/PROJ-12"
    assert GetIssueParams(issue=1001).path() == "/api/v2/issues/1001"
    with pytest.raises(InvalidIdentifierError):
        GetIssueParams(issue="proj-12")


def test_add_issue_form_with_custom_fields():
    params = AddIssueParams(
        project_id=10,
        summary="Login fails",
        issue_type_id=100,
        priority_id=3,
        start_date="2024-06-24",
        category_ids=[7],
        custom_fields={
            100: "free text",
            101: [11, 12],
            102: date(2024, 6, 30),
            103: 12.5,
        },
        custom_field_other_values={101: "Other OS"},
    )
    spec = params.to_request_spec()

    assert spec.method is HttpMethod.POST
    assert spec.path == "/api/v2/issues"
    assert spec.form == [
        ("projectId", "10"),
        ("summary", "Login fails"),
        ("startDate", "2024-06-24"),
        ("issueTypeId", "100"),
        ("categoryId[]", "7"),
        ("priorityId", "3"),
        ("customField_100", "free text"),
        ("customField_101", "11"),
        ("customField_101", "12"),
        ("customField_102", "2024-06-30"),
        ("customField_103", "12.5"),
        ("customField_101_otherValue", "Other OS"),
    ]


def test_update_issue_form():
    params = UpdateIssueParams(
        issue="PROJ-12", status_id=4, resolution_id=0, comment="Fixed"
    )
    spec = params.to_request_spec()

    assert spec.method is HttpMethod.PATCH
    assert spec.path == "/api/v2/issues/PROJ-12"
    assert spec.form == [("statusId", "4"), ("resolutionId", "0"), ("comment", "Fixed")]


def test_comment_operations():
    listing = GetCommentListParams(issue="PROJ-12", count=200, order="asc")
    assert listing.path() == "/api/v2/issues/PROJ-12/comments"
    assert listing.to_query() == [("count", "100"), ("order", "asc")]

    add = AddCommentParams(issue="PROJ-12", content="LGTM", notified_user_ids=[5])
    assert add.to_form() == [("content", "LGTM"), ("notifiedUserId[]", "5")]

    update = UpdateCommentParams(issue="PROJ-12", comment_id=77, content="edit")
    assert update.to_request_spec().path == "/api/v2/issues/PROJ-12/comments/77"


def test_attachment_and_participant_paths():
    download = GetAttachmentFileParams(issue="PROJ-12", attachment_id=8)
    assert isinstance(download, DownloadRequest)
    assert download.to_request_spec().path == "/api/v2/issues/PROJ-12/attachments/8"

    delete = DeleteAttachmentParams(issue=1001, attachment_id=8)
    assert delete.method is HttpMethod.DELETE
    assert delete.path() == "/api/v2/issues/1001/attachments/8"

    assert (
        GetParticipantListParams(issue="PROJ-12").path()
        == "/api/v2/issues/PROJ-12/participants"
    )
