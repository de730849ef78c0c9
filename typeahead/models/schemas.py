from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class ResultRecord(BaseModel):
    """One search hit. Fields beyond the required four are kept as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str
    url: str
    post_type: str
    slug: str

    def label(self) -> str:
        return self.title

    def permalink(self) -> str:
        # The search API returns a wrong url for anything but plain posts,
        # so those links are rebuilt from the base url, post type and slug.
        if self.post_type == "post":
            link = self.url
        else:
            link = self.url.split("?")[0] + self.post_type + "/" + self.slug
        return "http://" + link + "/"


class SortField(BaseModel):
    field: str
    order: Literal["asc", "desc"] = "desc"


DEFAULT_RESULT_FIELDS = ["blog_id", "post_id", "url", "title", "post_type", "slug"]
DEFAULT_SORT = [SortField(field="_score"), SortField(field="date")]


class SearchRequest(BaseModel):
    keyword: str = Field(..., min_length=1)
    fields: List[str] = Field(default_factory=lambda: list(DEFAULT_RESULT_FIELDS))
    post_types: List[str] = Field(default_factory=lambda: ["post"])
    size: int = Field(20, ge=1, le=100)
    sort: List[SortField] = Field(default_factory=lambda: list(DEFAULT_SORT))


class SearchResponse(BaseModel):
    keyword: str
    total: int
    records: List[ResultRecord]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    backend: str
    available: bool


class RenderedRow(BaseModel):
    label: str
    permalink: str
    html: str


class ListSnapshot(BaseModel):
    visible: bool
    active_index: Optional[int] = None
    rows: List[RenderedRow] = Field(default_factory=list)


class ClientEvent(BaseModel):
    """A message sent by the browser over the autocomplete websocket."""

    event: Literal["keyup", "keydown", "click"]
    value: str = ""
    key: Optional[Union[int, str]] = None
    index: Optional[int] = None
