import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from sqlalchemy.orm import Session
from app.config import settings
from app.errors import UploadValidationError
from app.models.author import Author
from app.models.file import File
from app.services.catalog_service import CatalogStore
from app.services.identity_service import resolve_or_create
from app.utils.validation import sanitize_filename, normalize_tags
import logging

logger = logging.getLogger(__name__)


@dataclass
class UploadItem:
    """上传批次中的单个文件"""
    filename: str
    content: bytes
    folder: str = ""
    nsfw: bool = False
    title: Optional[str] = None
    tags: Optional[str] = None
    description: Optional[str] = None


def build_file_url(sanitized_name: str) -> str:
    """文件记录中保存的相对路径"""
    return f"{settings.UPLOAD_SUBDIR}/{sanitized_name}"


def write_file_content(content_root: str, file_url: str, content: bytes) -> str:
    """将文件内容写入内容根目录，已存在的同名文件会被覆盖"""
    target = os.path.join(content_root, file_url)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    with open(target, "wb") as f:
        f.write(content)
    return target


async def upload_files(
    db: Session,
    author_token: int,
    items: Sequence[UploadItem],
    content_root: str
) -> Tuple[Author, List[File]]:
    """
    上传一批文件

    流程：
    1. 空批次直接拒绝
    2. 清理并校验全部文件名，有无效文件名时整批拒绝
    3. 解析作者（每个批次只解析一次，新标识会创建作者）
    4. 按提交顺序逐个处理：写入磁盘 → 插入文件记录
    5. 返回作者和上传完成后的完整文件列表

    注意：写磁盘和插入记录之间没有事务保护，中途失败会留下没有记录的文件内容，
    这类孤立文件不影响目录一致性，可以用对账脚本清理

    Args:
        db: 数据库会话
        author_token: 客户端作者标识
        items: 按顺序排列的上传文件
        content_root: 内容根目录

    Returns:
        (作者, 完整文件列表)
    """
    if not items:
        raise UploadValidationError("没有可上传的文件")

    logger.info(f"上传请求: author_token={author_token}, 文件数={len(items)}")

    # 整个批次先校验文件名，任何一项无效都不产生写入
    sanitized_names = []
    for item in items:
        sanitized_name = sanitize_filename(item.filename)
        if not sanitized_name:
            raise UploadValidationError(f"文件名无效: {item.filename!r}")
        sanitized_names.append(sanitized_name)

    author = await resolve_or_create(db, author_token)
    store = CatalogStore(db)

    for item, sanitized_name in zip(items, sanitized_names):
        logger.info(f"正在上传 {sanitized_name}")
        file_url = build_file_url(sanitized_name)
        target = write_file_content(content_root, file_url, item.content)

        logger.info(
            f"上传者 author_id={author.author_id}, name={author.name}, "
            f"creation_date={author.creation_date}, 路径={target}"
        )

        new_file = File(
            author_id=author.author_id,
            file_url=file_url,
            title=item.title or item.filename,
            description=item.description or "",
            tags=normalize_tags(item.tags),
            folder=item.folder or "",
            nsfw=bool(item.nsfw),
            likes=0,
            views=0
        )
        await store.insert(new_file)

    return author, await store.find_all()
