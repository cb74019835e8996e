"""
Reader API Routes

伴读端点：对话、翻译、解释、章节生成、摘要与回顾。
"""
from fastapi import APIRouter, Depends, Query

from suitcase.dependencies import get_assistant
from suitcase.schemas.reader import (
    BookChatBody,
    ChapterResponse,
    ExplainBody,
    TextResponse,
    TranslateBody,
)
from suitcase.services.ai.assistant import ReadingAssistant


router = APIRouter(prefix="/reader")


# ==================== API Endpoints ====================


@router.post("/chat", response_model=TextResponse)
async def chat_about_book(
    body: BookChatBody,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """围绕当前书籍对话"""
    text = await assistant.chat_about_book(body.title, body.message, tuple(body.history))
    return TextResponse(text=text)


@router.post("/translate", response_model=TextResponse)
async def translate_text(
    body: TranslateBody,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """翻译选中文本"""
    text = await assistant.translate_text(body.text, body.target_lang)
    return TextResponse(text=text)


@router.post("/explain", response_model=TextResponse)
async def explain_context(
    body: ExplainBody,
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """解释选中段落的背景"""
    text = await assistant.explain_context(body.text, body.title)
    return TextResponse(text=text)


@router.get("/chapters", response_model=ChapterResponse)
async def get_chapter(
    title: str = Query(..., min_length=1),
    author: str = Query("Unknown"),
    chapter: int = Query(1, ge=1, le=500),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """
    生成章节内容

    返回经过清洗的 HTML，只包含 <h3> 和 <p>。
    """
    html = await assistant.generate_book_content(title, author, chapter)
    return ChapterResponse(title=title, chapter=chapter, html=html)


@router.get("/summary", response_model=TextResponse)
async def get_summary(
    title: str = Query(..., min_length=1),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """全书摘要"""
    return TextResponse(text=await assistant.get_book_summary(title))


@router.get("/recap", response_model=TextResponse)
async def get_recap(
    title: str = Query(..., min_length=1),
    assistant: ReadingAssistant = Depends(get_assistant),
):
    """前情回顾（不剧透结局）"""
    return TextResponse(text=await assistant.get_book_recap(title))
