from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from ..encoding import Pairs, ParamList
from ..models import CountResponse, Notification, User
from ..request import ApiRequest, Count, HttpMethod, SortOrder


class GetMyselfParams(ApiRequest):
    response_type: ClassVar[Any] = User

    def path(self) -> str:
        return "/api/v2/users/myself"


class GetNotificationsParams(ApiRequest):
    response_type: ClassVar[Any] = List[Notification]

    min_id: Optional[int] = None
    max_id: Optional[int] = None
    count: Optional[Count] = None
    order: Optional[SortOrder] = None
    sender_id: Optional[int] = None

    def path(self) -> str:
        return "/api/v2/notifications"

    def to_query(self) -> Pairs:
        return (
            ParamList()
            .add("minId", self.min_id)
            .add("maxId", self.max_id)
            .add("count", self.count)
            .add("order", self.order)
            .add("senderId", self.sender_id)
            .pairs()
        )


class CountNotificationParams(ApiRequest):
    response_type: ClassVar[Any] = CountResponse

    already_read: Optional[bool] = None
    resource_already_read: Optional[bool] = None

    def path(self) -> str:
        return "/api/v2/notifications/count"

    def to_query(self) -> Pairs:
        return (
            ParamList()
            .add("alreadyRead", self.already_read)
            .add("resourceAlreadyRead", self.resource_already_read)
            .pairs()
        )


class ResetUnreadNotificationCountParams(ApiRequest):
    """Marks every notification read; answers with the remaining count."""

    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = CountResponse

    def path(self) -> str:
        return "/api/v2/notifications/markAsRead"


__all__ = [
    "GetMyselfParams",
    "GetNotificationsParams",
    "CountNotificationParams",
    "ResetUnreadNotificationCountParams",
]
