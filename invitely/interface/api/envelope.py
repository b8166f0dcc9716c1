"""Uniform response envelope: ``{success, data, error, meta?}``."""

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from invitely.domain.value import PageRequest

T = TypeVar("T")


class PageMeta(BaseModel):
    """Pagination details of a list response."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def from_total(cls, page: PageRequest, total: int) -> "PageMeta":
        return cls(
            page=page.page,
            limit=page.limit,
            total=total,
            total_pages=page.total_pages(total),
        )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every payload.

    ``meta`` only appears in the JSON of paginated responses.
    """

    success: bool = True
    data: T | None = None
    error: str | None = None
    meta: PageMeta | None = None

    @model_serializer(mode="wrap")
    def omit_empty_meta(self, handler):
        serialized = handler(self)
        if self.meta is None:
            serialized.pop("meta", None)
        return serialized


def ok(data: T, meta: PageMeta | None = None) -> ApiResponse[T]:
    """Wrap a successful payload."""
    return ApiResponse(success=True, data=data, meta=meta)


def paginated(
    items: Sequence[T], page: PageRequest, total: int
) -> ApiResponse[list[T]]:
    """Wrap one page of a list with its pagination meta."""
    return ApiResponse(
        success=True, data=list(items), meta=PageMeta.from_total(page, total)
    )


def failure(message: str) -> dict:
    """Error body as sent by the exception handlers."""
    return {"success": False, "data": None, "error": message}
