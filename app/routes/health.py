from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from sqlalchemy import text
import shutil
import logging
from app.config import settings
from app.utils.response import success_response
from app.extensions import get_db, get_content_root
from app.errors import OperationFailedException

logger = logging.getLogger(__name__)

router = APIRouter(tags=["系统状态"])
server_router = APIRouter(tags=["系统状态"], prefix="/server")

@router.get("/health")
async def check_health(db: Session = Depends(get_db)):
    """
    服务健康检查
    """
    db_status = "unknown"
    
    try:
        # 使用text()包装SQL语句
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        error_msg = str(e)
        # 截断错误信息，避免太长
        if len(error_msg) > 50:
            error_msg = error_msg[:50] + "..."
        db_status = f"disconnected ({error_msg})"
    
    return success_response(data={
        "status": "healthy",
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION
    })


@server_router.get("/space")
def get_free_space(content_root: str = Depends(get_content_root)):
    """
    服务器剩余磁盘空间（字节）

    读取内容根目录所在磁盘，与媒体库数据无关
    """
    try:
        usage = shutil.disk_usage(content_root)
    except OSError as e:
        logger.warning(f"读取磁盘空间失败: content_root={content_root}, error={e}")
        raise OperationFailedException("无法读取磁盘空间")
    return success_response(data=usage.free)
