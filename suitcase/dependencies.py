"""
FastAPI dependencies.
"""
from fastapi import Request

from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.openlibrary_service import OpenLibraryService


def get_assistant(request: Request) -> ReadingAssistant:
    """Reading assistant built once in the app lifespan."""
    return request.app.state.assistant


def get_openlibrary(request: Request) -> OpenLibraryService:
    """Open Library client built once in the app lifespan."""
    return request.app.state.openlibrary
