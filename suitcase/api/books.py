"""
Books API Routes

书籍发现端点：搜索、新用户推荐、心情推荐、书评、图书顾问，以及 Open Library 书目查询。
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from suitcase.dependencies import get_assistant, get_openlibrary
from suitcase.schemas.books import (
    BookListResponse,
    ConciergeChatRequest,
    OpenLibraryDetails,
    OpenLibraryListResponse,
    RecommendationRequest,
    ReviewListResponse,
)
from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.ai.schemas import ConciergeReply
from suitcase.services.openlibrary_service import OpenLibraryService


router = APIRouter()


# ==================== API Endpoints ====================


@router.get("/books/search", response_model=BookListResponse)
async def search_books(
    q: str = Query(..., min_length=1, max_length=200, description="书名、作者或主题"),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """
    搜索书籍

    无匹配结果时返回空列表。
    """
    books = await assistant.search_books(q)
    return BookListResponse(total=len(books), items=books)


@router.post("/books/recommendations", response_model=BookListResponse)
async def recommend_books(
    body: RecommendationRequest,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """根据偏好类型和阅读目标推荐书籍"""
    books = await assistant.get_onboarding_recommendations(body.genres, body.reading_goal)
    return BookListResponse(total=len(books), items=books)


@router.get("/books/mood", response_model=BookListResponse)
async def mood_recommendations(
    mood: str = Query(..., min_length=1, max_length=200, description="读者当前的心情"),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """根据读者当前心情推荐书籍"""
    books = await assistant.get_mood_recommendations(mood)
    return BookListResponse(total=len(books), items=books)


@router.get("/books/reviews", response_model=ReviewListResponse)
async def list_reviews(
    title: str = Query(..., min_length=1),
    author: str = Query("Unknown"),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """生成读者书评"""
    reviews = await assistant.generate_reviews(title, author)
    return ReviewListResponse(title=title, total=len(reviews), items=reviews)


@router.post("/concierge", response_model=ConciergeReply)
async def consult_concierge(
    body: ConciergeChatRequest,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """
    图书顾问对话

    返回回复文本和 0-3 本推荐书籍。
    """
    return await assistant.consult_concierge(body.message, tuple(body.history))


# ==================== Open Library ====================


@router.get("/books/openlibrary", response_model=OpenLibraryListResponse)
async def search_openlibrary(
    q: str = Query(..., min_length=1, max_length=200, description="书名、作者或主题"),
    limit: int = Query(20, ge=1, le=100),
    readable: bool = Query(False, description="只返回可在线阅读的作品"),
    openlibrary: OpenLibraryService = Depends(get_openlibrary),
):
    """
    搜索 Open Library

    返回真实封面与书目信息；Open Library 不可用时返回空列表。
    """
    if readable:
        books = await openlibrary.search_readable(q, limit)
    else:
        books = await openlibrary.search(q, limit)
    return OpenLibraryListResponse(total=len(books), items=books)


@router.get("/books/trending", response_model=OpenLibraryListResponse)
async def trending_books(
    limit: int = Query(10, ge=1, le=50),
    openlibrary: OpenLibraryService = Depends(get_openlibrary),
):
    """热门书目"""
    books = await openlibrary.get_trending(limit)
    return OpenLibraryListResponse(total=len(books), items=books)


@router.get("/books/openlibrary/works/{work_key}", response_model=OpenLibraryDetails)
async def openlibrary_details(
    work_key: str,
    openlibrary: OpenLibraryService = Depends(get_openlibrary),
):
    """获取作品简介与主题"""
    details = await openlibrary.get_book_details(work_key)
    if details is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Open Library work not found: {work_key}"
        )
    return details
