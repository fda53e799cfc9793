import os
from typing import Dict, Any
from sqlalchemy.orm import Session
from app.config import settings
from app.models.file import File
import logging

logger = logging.getLogger(__name__)


def reconcile_content_store(
    db: Session,
    content_root: str,
    remove_orphans: bool = False
) -> Dict[str, Any]:
    """
    对账：比较上传目录中的文件内容和数据库中的文件记录

    检查范围：
    1. 孤立内容：磁盘上存在、但没有任何文件记录指向的文件
    2. 缺失内容：有文件记录、但磁盘上找不到内容的文件

    策略：只报告，不修改数据库；remove_orphans=True 时删除孤立内容
    （孤立内容本身不影响目录，删除只是回收磁盘空间）

    Args:
        db: 数据库会话
        content_root: 内容根目录
        remove_orphans: 是否删除孤立内容

    Returns:
        对账结果
    """
    upload_dir = os.path.join(content_root, settings.UPLOAD_SUBDIR)

    records = db.query(File.id, File.file_url).all()
    referenced = {os.path.normpath(url) for _, url in records}

    # 第一步：找出缺失内容的记录
    missing = []
    for file_id, file_url in records:
        if not os.path.isfile(os.path.join(content_root, file_url)):
            missing.append({"fileId": file_id, "fileUrl": file_url})

    # 第二步：找出孤立内容
    orphans = []
    if os.path.isdir(upload_dir):
        for name in sorted(os.listdir(upload_dir)):
            if not os.path.isfile(os.path.join(upload_dir, name)):
                continue
            relative = os.path.normpath(f"{settings.UPLOAD_SUBDIR}/{name}")
            if relative not in referenced:
                orphans.append(relative)
    else:
        logger.warning(f"上传目录不存在: {upload_dir}")

    # 第三步：按需删除孤立内容
    removed = 0
    if remove_orphans:
        for relative in orphans:
            path = os.path.join(content_root, relative)
            try:
                os.remove(path)
                removed += 1
                logger.info(f"已删除孤立内容: {path}")
            except OSError as e:
                logger.warning(f"删除孤立内容失败: path={path}, error={e}")

    if missing:
        logger.warning(f"发现 {len(missing)} 条记录缺少文件内容")
    logger.info(f"对账完成: 记录数={len(records)}, 孤立内容={len(orphans)}, 缺失内容={len(missing)}, 已删除={removed}")

    return {
        "records": len(records),
        "orphans": orphans,
        "missing": missing,
        "removedOrphans": removed
    }
