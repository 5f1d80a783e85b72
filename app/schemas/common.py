"""Shared response shapes."""

from math import ceil

from pydantic import BaseModel


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=ceil(total / limit) if limit else 0)


class Message(BaseModel):
    message: str
