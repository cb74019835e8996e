"""
FastAPI Main Entry

Suitcase Reader - AI 阅读助手 API 服务。
"""
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from suitcase.config import (
    API_HOST,
    API_PORT,
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    DEBUG,
    LOG_FILE,
    LOG_LEVEL,
    LOG_RETENTION,
    LOG_ROTATION,
)
from suitcase.dependencies import get_assistant
from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.ai.selector import build_reading_assistant
from suitcase.services.openlibrary_service import OpenLibraryService


# ==================== Logging ====================
def setup_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE):
    """配置 loguru：stderr 输出 + 可选的滚动日志文件"""
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(
            log_file,
            level=level,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            encoding="utf-8",
        )


# ==================== Lifespan ====================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """启动时选择 AI 提供商并构建阅读助手与 Open Library 客户端（进程内只构建一次）"""
    setup_logging()
    app.state.assistant = build_reading_assistant()
    app.state.openlibrary = OpenLibraryService()
    logger.info(
        f"{APP_NAME} API v{APP_VERSION} started on http://{API_HOST}:{API_PORT} "
        f"(provider={app.state.assistant.get_active_provider()})"
    )
    yield
    logger.info(f"{APP_NAME} API stopped")


# ==================== Create FastAPI App ====================
app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    debug=DEBUG,
    lifespan=lifespan,
    description="""
    Suitcase Reader API

    多提供商 AI 阅读助手，在线服务不可用时自动降级到离线数据。

    ## 主要功能
    * **书籍搜索**: 按书名、作者或主题搜索
    * **心情推荐**: 按当前心情推荐书籍
    * **Open Library**: 真实书目、封面与可在线阅读的作品
    * **新用户推荐**: 根据偏好类型和阅读目标推荐
    * **图书顾问**: 对话式选书
    * **伴读**: 对话、翻译、段落解释
    * **章节生成**: 生成章节 HTML
    * **摘要与回顾**: 全书摘要、前情回顾
    """,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ==================== Configure CORS ====================
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS if CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== Import and Register Routers ====================
from suitcase.api import assist, books, reader

app.include_router(books.router, prefix="/api/v1", tags=["books"])
app.include_router(reader.router, prefix="/api/v1", tags=["reader"])
app.include_router(assist.router, prefix="/api/v1", tags=["assist"])


# ==================== Root Endpoint ====================
@app.get("/", tags=["Root"])
async def root():
    """API 服务根路径"""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc",
    }


# ==================== Health Check ====================
@app.get("/health", tags=["Root"])
async def health_check(assistant: ReadingAssistant = Depends(get_assistant)):
    """健康检查端点（live=False 表示运行在离线模式）"""
    return {
        "status": "healthy",
        "provider": assistant.get_active_provider(),
        "live": assistant.is_live(),
    }


# ==================== Global Exception Handlers ====================
@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """通用异常处理"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_type": "internal_error",
            "message": str(exc) if app.debug else "An unexpected error occurred",
        },
    )


# ==================== Run Server ====================
def run():
    """Console entry point: suitcase-api"""
    import uvicorn

    uvicorn.run(
        "suitcase.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=DEBUG,
        log_level="info",
    )


if __name__ == "__main__":
    run()
