"""
媒体库存储服务

负责文件/作者/评论三类记录的增删改查，所有操作都直接查询数据库，
不维护进程内的目录副本。查询不到记录时返回 None（或 0），不抛异常，
由路由层统一映射为 404。
"""
import os
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.author import Author
from app.models.file import File
from app.models.comment import Comment
from app.errors import AuthorHasFilesError
import logging

logger = logging.getLogger(__name__)


class CatalogStore:
    """媒体库存储 - 文件、作者、评论的持久化操作"""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------- 文件查询 ----------------------------

    async def count(self) -> int:
        return self.db.query(File).count()

    async def find_all(self) -> List[File]:
        return self.db.query(File).order_by(File.id).all()

    async def find_one(self, file_id: int) -> Optional[File]:
        return self.db.query(File).filter(File.id == file_id).first()

    async def find_all_by(self, author_id: int) -> List[File]:
        """查询某个作者的全部文件"""
        return (
            self.db.query(File)
            .filter(File.author_id == author_id)
            .order_by(File.id)
            .all()
        )

    def find_folder(self, name: str) -> List[File]:
        """
        按文件夹名称精确匹配（区分大小写）

        注意：部分数据库的默认排序规则不区分大小写，这里再按 Python 字符串比较一次
        """
        files = self.db.query(File).filter(File.folder == name).order_by(File.id).all()
        return [f for f in files if f.folder == name]

    async def search(self, term: Optional[str]) -> List[File]:
        """
        在标题、标签、文件夹中做子串匹配（不区分大小写），结果取并集，按存储顺序返回

        空关键字返回全部文件
        """
        term = (term or "").strip()
        query = self.db.query(File)
        if term:
            query = query.filter(or_(
                File.title.icontains(term, autoescape=True),
                File.tags.icontains(term, autoescape=True),
                File.folder.icontains(term, autoescape=True),
            ))
        return query.order_by(File.id).all()

    # ---------------------------- 文件写入 ----------------------------

    async def insert(self, entity):
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    async def update(self, entity):
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    async def update_folder(self, file_id: int, folder: str) -> Optional[File]:
        file_record = await self.find_one(file_id)
        if not file_record:
            return None
        file_record.folder = folder or ""
        return await self.update(file_record)

    async def increment_likes(self, file_id: int) -> Optional[File]:
        return await self._increment(file_id, File.likes)

    async def increment_views(self, file_id: int) -> Optional[File]:
        return await self._increment(file_id, File.views)

    async def _increment(self, file_id: int, column) -> Optional[File]:
        """
        计数器原子加一

        使用 UPDATE ... SET col = col + 1，由数据库保证并发请求不会丢失更新
        """
        affected = (
            self.db.query(File)
            .filter(File.id == file_id)
            .update({column: column + 1}, synchronize_session=False)
        )
        self.db.commit()
        if not affected:
            return None
        # 提交后会话中的对象已过期，这里重新读取最新值
        return await self.find_one(file_id)

    async def delete(self, file_id: int, content_root: str) -> int:
        """
        删除文件：先删除磁盘上的文件内容，再删除评论和文件记录

        两步之间没有事务保护：若删除记录失败，会留下“有记录无内容”的文件，
        可以通过对账脚本发现

        Args:
            file_id: 文件ID
            content_root: 内容根目录

        Returns:
            删除的记录数（文件不存在时为 0）
        """
        file_record = await self.find_one(file_id)
        if not file_record:
            return 0

        path = os.path.join(content_root, file_record.file_url)
        try:
            os.remove(path)
            logger.info(f"已删除文件内容: {path}")
        except FileNotFoundError:
            # 内容已经不在磁盘上，继续删除记录
            logger.warning(f"文件内容不存在，仅删除记录: file_id={file_id}, path={path}")

        self.db.delete(file_record)
        self.db.commit()
        logger.info(f"已删除文件记录: file_id={file_id}")
        return 1

    # ---------------------------- 作者 ----------------------------

    async def remove_author(self, author_id: int) -> int:
        """
        删除作者记录

        调用方必须先删除该作者的全部文件；仍有文件时拒绝删除，避免留下孤立文件

        Returns:
            删除的作者数（作者不存在时为 0）
        """
        remaining = self.db.query(File).filter(File.author_id == author_id).count()
        if remaining:
            raise AuthorHasFilesError(author_id, remaining)

        author = self.db.query(Author).filter(Author.author_id == author_id).first()
        if not author:
            return 0

        self.db.delete(author)
        self.db.commit()
        logger.info(f"已删除作者: author_id={author_id}")
        return 1

    # ---------------------------- 评论 ----------------------------

    async def insert_comment(self, file_id: int, author: Author, content: str, date: int) -> Comment:
        """添加评论，author 可以是已入库的作者，也可以是匿名作者"""
        comment = Comment(
            file_id=file_id,
            author_id=author.author_id,
            author_name=author.name,
            author_creation_date=author.creation_date,
            content=content,
            date=date
        )
        return await self.insert(comment)

    async def find_comment(self, comment_id: int) -> Optional[Comment]:
        return self.db.query(Comment).filter(Comment.id == comment_id).first()

    async def find_comments_for_file(self, file_id: int) -> List[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.file_id == file_id)
            .order_by(Comment.id)
            .all()
        )

    async def delete_comment(self, comment_id: int, file_id: Optional[int] = None) -> int:
        """
        按ID删除评论

        指定 file_id 时，只删除属于该文件的评论

        Returns:
            删除的评论数（评论不存在或不属于该文件时为 0）
        """
        comment = await self.find_comment(comment_id)
        if not comment:
            return 0
        if file_id is not None and comment.file_id != file_id:
            logger.warning(f"评论不属于该文件，拒绝删除: comment_id={comment_id}, file_id={file_id}")
            return 0

        self.db.delete(comment)
        self.db.commit()
        return 1

    # ---------------------------- 统计 ----------------------------

    async def list_folders(self) -> List[str]:
        rows = self.db.query(File.folder).distinct().all()
        return sorted({row[0] for row in rows if row[0]})

    async def list_tags(self) -> List[str]:
        tags = set()
        for (value,) in self.db.query(File.tags).all():
            if value:
                tags.update(t for t in value.split(",") if t)
        return sorted(tags)

    async def list_types(self) -> List[str]:
        types = set()
        for (value,) in self.db.query(File.file_url).all():
            ext = os.path.splitext(value or "")[1].lstrip(".").lower()
            if ext:
                types.add(ext)
        return sorted(types)
