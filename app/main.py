from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .config import settings
from .extensions import engine
from contextlib import asynccontextmanager
from app.errors import CustomHTTPException
from app.models import Base
from app.utils.response import error_response
import app.routes.health as health_router
import app.routes.catalog as catalog_router
import app.routes.comments as comments_router
import app.routes.authors as authors_router
import logging
import os

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理
    - 启动时：创建数据库表（如果不存在），确保上传目录存在
    - 关闭时：清理资源
    """
    try:
        logger.info("正在检查并创建数据库表（如果不存在）...")
        Base.metadata.create_all(bind=engine)
        logger.info("数据库表检查完成，所有表已就绪")
    except Exception as e:
        error_msg = str(e)
        logger.error("=" * 60)
        logger.error("数据库连接失败，无法创建表")
        logger.error(f"错误详情: {error_msg}")
        logger.error("请检查 DATABASE_URL 配置和数据库服务状态")
        logger.error("=" * 60)
        # 抛出异常，阻止应用启动（应用需要数据库才能正常工作）
        raise RuntimeError(f"数据库初始化失败: {error_msg}") from e

    upload_dir = os.path.join(settings.CONTENT_ROOT, settings.UPLOAD_SUBDIR)
    os.makedirs(upload_dir, exist_ok=True)
    logger.info(f"上传目录: {upload_dir}")

    yield

    # 关闭时：目前无需特殊清理，SQLAlchemy 会自动管理连接池


# 创建FastAPI应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CustomHTTPException)
async def custom_http_exception_handler(request: Request, exc: CustomHTTPException):
    """业务异常统一转换为标准响应格式"""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(code=exc.code, msg=exc.msg)
    )


# 注册路由
app.include_router(health_router.router)
app.include_router(health_router.server_router, prefix=settings.API_PREFIX)
app.include_router(catalog_router.router, prefix=settings.API_PREFIX)
app.include_router(comments_router.router, prefix=settings.API_PREFIX)
app.include_router(authors_router.router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """返回 API 信息"""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }
