from typing import List
from sqlalchemy.orm import Session
from app.models.file import File
from app.services.catalog_service import CatalogStore
import logging

logger = logging.getLogger(__name__)


class FileManagementService:
    """文件管理服务 - 处理文件删除、作者级联删除等管理操作"""

    @staticmethod
    async def delete_file(
        file_id: int,
        db: Session,
        content_root: str
    ) -> int:
        """
        删除单个文件（磁盘内容 + 评论 + 文件记录）

        Args:
            file_id: 文件ID
            db: 数据库会话
            content_root: 内容根目录

        Returns:
            删除数量：文件不存在时为 0，否则为 1
        """
        deleted = await CatalogStore(db).delete(file_id, content_root)
        if not deleted:
            logger.info(f"删除文件时未找到记录: file_id={file_id}")
        return deleted

    @staticmethod
    async def delete_author_cascade(
        author_id: int,
        db: Session,
        content_root: str
    ) -> List[File]:
        """
        删除作者及其全部文件

        先逐个删除作者的文件，再删除作者记录。任何一步抛出异常都会终止整个级联，
        异常原样抛给调用方；已经删除的文件不会恢复

        Args:
            author_id: 作者ID
            db: 数据库会话
            content_root: 内容根目录

        Returns:
            删除完成后的完整文件列表
        """
        store = CatalogStore(db)
        author_files = await store.find_all_by(author_id)
        file_ids = [f.id for f in author_files]

        logger.info(f"开始级联删除作者: author_id={author_id}, 文件数={len(file_ids)}")

        deleted_count = 0
        for file_id in file_ids:
            try:
                deleted_count += await FileManagementService.delete_file(file_id, db, content_root)
            except Exception as e:
                db.rollback()
                logger.error(
                    f"级联删除中断: author_id={author_id}, file_id={file_id}, "
                    f"已删除 {deleted_count}/{len(file_ids)} 个文件, error={e}"
                )
                raise

        await store.remove_author(author_id)

        logger.info(f"作者 {author_id} 已删除，共删除 {deleted_count} 个文件")
        return await store.find_all()
