"""
Services 模块

导出阅读助手服务与 Open Library 查询服务。
"""
from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.ai.selector import build_reading_assistant
from suitcase.services.openlibrary_service import OpenLibraryService

__all__ = ["ReadingAssistant", "build_reading_assistant", "OpenLibraryService"]
