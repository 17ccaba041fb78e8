from typing import List

import pytest
from backlog_client.api.git import (
    GetPullRequestAttachmentFileParams,
    GetPullRequestCountParams,
    GetPullRequestListParams,
    GetRepositoryListParams,
    GetRepositoryParams,
)
from backlog_client.api.projects import (
    AddStatusParams,
    GetCategoryListParams,
    GetIssueTypeListParams,
    GetMilestoneListParams,
    GetPriorityListParams,
    GetProjectIconParams,
    GetProjectListParams,
    GetResolutionListParams,
    GetStatusListParams,
    UpdateProjectParams,
    UpdateStatusParams,
)
from backlog_client.api.users import (
    CountNotificationParams,
    GetMyselfParams,
    GetNotificationsParams,
    ResetUnreadNotificationCountParams,
)
from backlog_client.api.webhooks import (
    AddWebhookParams,
    DeleteWebhookParams,
    GetWebhookListParams,
    UpdateWebhookParams,
)
from backlog_client.api.wikis import (
    GetSharedFileParams,
    GetWikiAttachmentFileParams,
    GetWikiListParams,
)
from backlog_client.errors import (
    BacklogValidationError,
    InvalidIdentifierError,
    InvalidParameterError,
)
from backlog_client.models import (
    Priority,
    Project,
    Resolution,
    Status,
    StatusColor,
    TextFormattingRule,
)
from backlog_client.request import DownloadRequest, HttpMethod, SortOrder
from pydantic import ValidationError


def test_project_paths():
    assert GetProjectListParams().path() == "/api/v2/projects"
    assert GetStatusListParams(project="PROJ").path() == "/api/v2/projects/PROJ/statuses"
    assert (
        GetIssueTypeListParams(project=10).path()
        == "/api/v2/projects/10/issueTypes"
    )
    assert (
        GetCategoryListParams(project="PROJ").path()
        == "/api/v2/projects/PROJ/categories"
    )
    assert (
        GetMilestoneListParams(project="PROJ").path()
        == "/api/v2/projects/PROJ/versions"
    )
    icon = GetProjectIconParams(project="PROJ")
    assert isinstance(icon, DownloadRequest)
    assert icon.path() == "/api/v2/projects/PROJ/image"


def test_project_list_query():
    assert GetProjectListParams(archived=False).to_query() == [("archived", "false")]
    assert GetProjectListParams().to_query() == []


def test_add_status_color_token():
    spec = AddStatusParams(
        project="PROJ", name="Review", color=StatusColor.BLUE
    ).to_request_spec()
    assert spec.method is HttpMethod.POST
    assert spec.form == [("name", "Review"), ("color", "#3b9dbd")]

    assert AddStatusParams(project="PROJ", name="QA", color="#4caf93").color is (
        StatusColor.GREEN
    )
    with pytest.raises(InvalidParameterError) as exc:
        AddStatusParams(project="PROJ", name="Odd", color="#123456")
    assert isinstance(exc.value.__cause__, ValidationError)


def test_update_status_sends_given_keys():
    spec = UpdateStatusParams(
        project="PROJ", status_id=7, color="#eda62a"
    ).to_request_spec()
    assert spec.method is HttpMethod.PATCH
    assert spec.path == "/api/v2/projects/PROJ/statuses/7"
    assert spec.form == [("color", "#eda62a")]
    assert UpdateStatusParams.response_type is Status

    renamed = UpdateStatusParams(project=10, status_id=7, name="Doing")
    assert renamed.to_form() == [("name", "Doing")]

    with pytest.raises(InvalidParameterError):
        UpdateStatusParams(project="PROJ", status_id=0)


def test_update_project_form():
    params = UpdateProjectParams(
        project="PROJ",
        name="Renamed",
        chart_enabled=False,
        use_git=True,
        text_formatting_rule="markdown",
        archived=False,
    )
    spec = params.to_request_spec()

    assert spec.method is HttpMethod.PATCH
    assert spec.path == "/api/v2/projects/PROJ"
    assert spec.form == [
        ("name", "Renamed"),
        ("chartEnabled", "false"),
        ("useGit", "true"),
        ("textFormattingRule", "markdown"),
        ("archived", "false"),
    ]
    assert params.text_formatting_rule is TextFormattingRule.MARKDOWN
    assert UpdateProjectParams.response_type is Project
    assert UpdateProjectParams(project=10).to_form() == []

    with pytest.raises(InvalidParameterError):
        UpdateProjectParams(project="PROJ", text_formatting_rule="wiki")


def test_priority_and_resolution_lists():
    priorities = GetPriorityListParams().to_request_spec()
    assert priorities.method is HttpMethod.GET
    assert priorities.path == "/api/v2/priorities"
    assert priorities.query == []
    assert priorities.form is None
    assert GetPriorityListParams.response_type == List[Priority]

    resolutions = GetResolutionListParams().to_request_spec()
    assert resolutions.path == "/api/v2/resolutions"
    assert GetResolutionListParams.response_type == List[Resolution]


def test_parameter_objects_reject_unknown_fields():
    with pytest.raises(BacklogValidationError):
        GetProjectListParams(archive=True)


def test_notifications_query():
    params = GetNotificationsParams(
        min_id=5, count=500, order=SortOrder.ASC, sender_id=3
    )
    assert params.path() == "/api/v2/notifications"
    assert params.to_query() == [
        ("minId", "5"),
        ("count", "100"),
        ("order", "asc"),
        ("senderId", "3"),
    ]

    count = CountNotificationParams(already_read=False)
    assert count.path() == "/api/v2/notifications/count"
    assert count.to_query() == [("alreadyRead", "false")]

    assert GetMyselfParams().path() == "/api/v2/users/myself"


def test_reset_unread_notifications_is_post_without_fields():
    spec = ResetUnreadNotificationCountParams().to_request_spec()
    assert spec.method is HttpMethod.POST
    assert spec.path == "/api/v2/notifications/markAsRead"
    assert spec.form == []


def test_add_webhook_form():
    params = AddWebhookParams(
        project="PROJ",
        name="CI",
        hook_url="https://ci.example.com/hook",
        all_event=False,
        activity_type_ids=[1, 2],
    )
    spec = params.to_request_spec()

    assert spec.path == "/api/v2/projects/PROJ/webhooks"
    assert spec.form == [
        ("name", "CI"),
        ("hookUrl", "https://ci.example.com/hook"),
        ("allEvent", "false"),
        ("activityTypeId[]", "1"),
        ("activityTypeId[]", "2"),
    ]


def test_webhook_update_and_delete():
    update = UpdateWebhookParams(project=10, webhook_id=7, all_event=True)
    assert update.method is HttpMethod.PATCH
    assert update.path() == "/api/v2/projects/10/webhooks/7"
    assert update.to_form() == [("allEvent", "true")]

    delete = DeleteWebhookParams(project="PROJ", webhook_id=7)
    assert delete.method is HttpMethod.DELETE
    assert delete.to_request_spec().form is None

    assert GetWebhookListParams(project="PROJ").path() == "/api/v2/projects/PROJ/webhooks"


def test_repository_paths():
    assert (
        GetRepositoryListParams(project="PROJ").path()
        == "/api/v2/projects/PROJ/git/repositories"
    )
    assert (
        GetRepositoryParams(project="PROJ", repository="app.git").path()
        == "/api/v2/projects/PROJ/git/repositories/app.git"
    )
    with pytest.raises(InvalidIdentifierError):
        GetRepositoryParams(project="PROJ", repository="-bad")


def test_pull_request_list_and_count():
    listing = GetPullRequestListParams(
        project="PROJ", repository=3, status_ids=[1], count=0, offset=10
    )
    assert listing.path() == "/api/v2/projects/PROJ/git/repositories/3/pullRequests"
    assert listing.to_query() == [
        ("statusId[]", "1"),
        ("offset", "10"),
        ("count", "1"),
    ]

    count = GetPullRequestCountParams(
        project="PROJ", repository="app", assignee_ids=[5], issue_ids=[1001]
    )
    assert count.path() == (
        "/api/v2/projects/PROJ/git/repositories/app/pullRequests/count"
    )
    assert count.to_query() == [("assigneeId[]", "5"), ("issueId[]", "1001")]


def test_pull_request_attachment_download():
    params = GetPullRequestAttachmentFileParams(
        project="PROJ", repository="app", number=12, attachment_id=99
    )
    assert params.path() == (
        "/api/v2/projects/PROJ/git/repositories/app/pullRequests/12/attachments/99"
    )


def test_wiki_operations():
    listing = GetWikiListParams(project="PROJ", keyword="release")
    assert listing.path() == "/api/v2/wikis"
    assert listing.to_query() == [("projectIdOrKey", "PROJ"), ("keyword", "release")]

    attachment = GetWikiAttachmentFileParams(wiki_id=3, attachment_id=4)
    assert attachment.path() == "/api/v2/wikis/3/attachments/4"

    shared = GetSharedFileParams(project=10, shared_file_id=5)
    assert shared.path() == "/api/v2/projects/10/files/5"
