from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from pydantic import Field

from ..encoding import Pairs, ParamList
from ..identifiers import ProjectIdOrKey
from ..models import Wiki
from ..request import ApiRequest, DownloadRequest
from .projects import ProjectScoped


class GetWikiListParams(ApiRequest):
    response_type: ClassVar[Any] = List[Wiki]

    project: ProjectIdOrKey
    keyword: Optional[str] = None

    def path(self) -> str:
        return "/api/v2/wikis"

    def to_query(self) -> Pairs:
        return (
            ParamList()
            .add("projectIdOrKey", self.project)
            .add("keyword", self.keyword)
            .pairs()
        )


class GetWikiAttachmentFileParams(DownloadRequest):
    wiki_id: int = Field(gt=0)
    attachment_id: int = Field(gt=0)

    def path(self) -> str:
        return f"/api/v2/wikis/{self.wiki_id}/attachments/{self.attachment_id}"


class GetSharedFileParams(ProjectScoped, DownloadRequest):
    shared_file_id: int = Field(gt=0)

    def path(self) -> str:
        return self.project_path("files", self.shared_file_id)


__all__ = [
    "GetWikiListParams",
    "GetWikiAttachmentFileParams",
    "GetSharedFileParams",
]
