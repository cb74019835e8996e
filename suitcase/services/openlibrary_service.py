"""
Open Library Service - 真实书目与封面查询

Metadata lookups against the public Open Library API:
1. search() - 按关键词搜索作品（真实封面、ISBN、评分）
2. search_readable() - 只保留可在 Internet Archive 在线阅读的作品
3. get_trending() - 热门书目（从几个热门查询中随机选一个）
4. get_book_details() - 作品简介与主题

No API key is needed. Network errors and bad responses are logged and turn
into an empty list (or None for details). There is no fallback chain.
"""
import random
from typing import List, Optional

import httpx
from loguru import logger

from suitcase.config import (
    OPENLIBRARY_BASE_URL,
    OPENLIBRARY_COVERS_URL,
    OPENLIBRARY_SEARCH_LIMIT,
    OPENLIBRARY_TIMEOUT,
)
from suitcase.schemas.books import OpenLibraryBook, OpenLibraryDetails


SEARCH_FIELDS = (
    "key", "title", "author_name", "first_publish_year", "cover_i", "isbn",
    "subject", "language", "edition_count", "has_fulltext", "ia",
    "ratings_average", "ratings_count",
)

TRENDING_QUERIES = ("bestseller", "popular fiction", "classic literature")

PASTEL_COLORS = (
    "#e0f2fe", "#dbeafe", "#bfdbfe",
    "#f0fdf4", "#dcfce7", "#bbf7d0",
    "#fdf4ff", "#fae8ff", "#f5d0fe",
    "#fff1f2", "#ffe4e6", "#fecdd3",
    "#fefce8", "#fef9c3", "#fef08a",
    "#f5f5f4", "#fafaf9", "#e7e5e4",
)

MAX_CATEGORIES = 5
NO_DESCRIPTION = "No description available."


def work_id(key: str) -> str:
    """'/works/OL45804W' -> 'OL45804W'"""
    return key.replace("/works/", "").strip("/")


def get_readable_url(ia_id: str) -> str:
    """Internet Archive reader URL for a scan identifier."""
    return f"https://archive.org/stream/{ia_id}"


class OpenLibraryService:
    """
    Open Library 查询服务

    Args:
        base_url: API root (config: openlibrary.base_url)
        covers_url: Cover image root (config: openlibrary.covers_url)
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str = OPENLIBRARY_BASE_URL,
        covers_url: str = OPENLIBRARY_COVERS_URL,
        timeout: float = OPENLIBRARY_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.covers_url = covers_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def get_cover_url(self, identifier: str, kind: str = "id", size: str = "L") -> str:
        """
        Cover image URL by cover id or ISBN.

        Examples:
            >>> OpenLibraryService().get_cover_url("8231856")
            'https://covers.openlibrary.org/b/id/8231856-L.jpg'
        """
        return f"{self.covers_url}/b/{kind}/{identifier}-{size}.jpg"

    async def _get_json(self, path: str, params: Optional[dict] = None):
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()

    # ==================== Search ====================

    async def search(self, query: str, limit: int = OPENLIBRARY_SEARCH_LIMIT) -> List[OpenLibraryBook]:
        """
        搜索作品

        Args:
            query: Free-text query (Open Library search syntax is passed through)
            limit: Maximum number of results

        Returns:
            Books in Open Library's relevance order; empty on any failure
        """
        params = {"q": query, "limit": limit, "fields": ",".join(SEARCH_FIELDS)}
        try:
            data = await self._get_json("/search.json", params=params)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Open Library 搜索失败 ({query!r}): {e}")
            return []

        docs = data.get("docs") if isinstance(data, dict) else None
        if not isinstance(docs, list):
            logger.warning(f"Open Library 搜索响应格式异常 ({query!r})")
            return []

        books = []
        for doc in docs:
            if isinstance(doc, dict) and doc.get("key"):
                books.append(self._to_book(doc, len(books)))
        logger.debug(f"Open Library 搜索 {query!r}: {len(books)} 条结果")
        return books

    async def search_readable(self, query: str, limit: int = 10) -> List[OpenLibraryBook]:
        """只返回有全文扫描、可在线阅读的作品"""
        books = await self.search(f"{query} has_fulltext:true", limit)
        return [book for book in books if book.has_full_text]

    async def get_trending(self, limit: int = 10) -> List[OpenLibraryBook]:
        """
        热门书目

        Open Library has no trending endpoint, so one popular query is
        picked at random.
        """
        return await self.search(random.choice(TRENDING_QUERIES), limit)

    def _to_book(self, doc: dict, index: int) -> OpenLibraryBook:
        key = str(doc["key"])
        authors = doc.get("author_name") or []
        isbns = doc.get("isbn") or []
        year = doc.get("first_publish_year")
        cover_id = doc.get("cover_i")
        ia_ids = [str(ia) for ia in doc.get("ia") or []]

        return OpenLibraryBook(
            id=f"ol-{work_id(key)}",
            title=str(doc.get("title") or "Unknown"),
            author=str(authors[0]) if authors else "Unknown Author",
            published_year=str(year) if year is not None else "Unknown",
            categories=[str(s) for s in (doc.get("subject") or [])[:MAX_CATEGORIES]],
            cover_color=PASTEL_COLORS[index % len(PASTEL_COLORS)],
            isbn=str(isbns[0]) if isbns else None,
            open_library_id=key,
            cover_image_url=self.get_cover_url(str(cover_id)) if cover_id else None,
            average_rating=doc.get("ratings_average"),
            ratings_count=doc.get("ratings_count"),
            has_full_text=bool(doc.get("has_fulltext")),
            internet_archive_ids=ia_ids,
            readable_url=get_readable_url(ia_ids[0]) if ia_ids else None,
        )

    # ==================== Details ====================

    async def get_book_details(self, key: str) -> Optional[OpenLibraryDetails]:
        """
        获取作品详情

        Args:
            key: Work key with or without the "/works/" prefix

        Returns:
            OpenLibraryDetails, or None when the work is unknown or the request fails
        """
        clean = work_id(key)
        try:
            data = await self._get_json(f"/works/{clean}.json")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Open Library 作品详情获取失败 ({clean}): {e}")
            return None
        if not isinstance(data, dict):
            return None

        description = data.get("description")
        if isinstance(description, dict):
            description = description.get("value")

        return OpenLibraryDetails(
            open_library_id=f"/works/{clean}",
            description=str(description) if description else NO_DESCRIPTION,
            categories=[str(s) for s in (data.get("subjects") or [])[:MAX_CATEGORIES]],
        )


__all__ = [
    "OpenLibraryService",
    "get_readable_url",
    "work_id",
]
