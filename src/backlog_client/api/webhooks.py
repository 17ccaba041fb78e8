from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from pydantic import Field

from ..encoding import Pairs, ParamList
from ..models import Webhook
from ..request import HttpMethod
from .projects import ProjectScoped


class GetWebhookListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[Webhook]

    def path(self) -> str:
        return self.project_path("webhooks")


class AddWebhookParams(ProjectScoped):
    """
    Register a webhook.
    With all_event=True every activity triggers it and activity_type_ids
    is ignored by the server.
    """

    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = Webhook

    name: str
    hook_url: str
    description: Optional[str] = None
    all_event: Optional[bool] = None
    activity_type_ids: Optional[List[int]] = None

    def path(self) -> str:
        return self.project_path("webhooks")

    def to_form(self) -> Pairs:
        return (
            ParamList()
            .add("name", self.name)
            .add("description", self.description)
            .add("hookUrl", self.hook_url)
            .add("allEvent", self.all_event)
            .add_array("activityTypeId", self.activity_type_ids)
            .pairs()
        )


class WebhookScoped(ProjectScoped):
    webhook_id: int = Field(gt=0)

    def path(self) -> str:
        return self.project_path("webhooks", self.webhook_id)


class UpdateWebhookParams(WebhookScoped):
    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = Webhook

    name: Optional[str] = None
    description: Optional[str] = None
    hook_url: Optional[str] = None
    all_event: Optional[bool] = None
    activity_type_ids: Optional[List[int]] = None

    def to_form(self) -> Pairs:
        return (
            ParamList()
            .add("name", self.name)
            .add("description", self.description)
            .add("hookUrl", self.hook_url)
            .add("allEvent", self.all_event)
            .add_array("activityTypeId", self.activity_type_ids)
            .pairs()
        )


class DeleteWebhookParams(WebhookScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = Webhook


__all__ = [
    "GetWebhookListParams",
    "AddWebhookParams",
    "UpdateWebhookParams",
    "DeleteWebhookParams",
]
