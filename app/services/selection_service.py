import random
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.file import File
from app.schemas.request import MediaFilter
from app.services.catalog_service import CatalogStore
import logging

logger = logging.getLogger(__name__)


async def find_random(db: Session) -> Optional[File]:
    """
    从全部文件中均匀随机选取一个

    先取总数，再按随机偏移量读取一条，不依赖额外索引
    """
    total = db.query(File).count()
    if total == 0:
        return None
    offset = random.randrange(total)
    return db.query(File).order_by(File.id).offset(offset).first()


def _candidates(db: Session, exclude_id: Optional[int], media_filter: Optional[MediaFilter]) -> List[File]:
    query = db.query(File)
    if exclude_id is not None:
        query = query.filter(File.id != exclude_id)
    files = query.order_by(File.id).all()
    if media_filter is None:
        return files
    return [f for f in files if media_filter.matches(f)]


async def find_random_media(
    db: Session,
    exclude_id: Optional[int],
    media_filter: Optional[MediaFilter] = None
) -> Optional[File]:
    """
    在满足筛选条件、且不是当前文件的集合中均匀随机选取一个

    Args:
        db: 数据库会话
        exclude_id: 需要排除的文件ID（通常是正在展示的文件）
        media_filter: 筛选条件，None 表示不筛选

    Returns:
        选中的文件；候选集合为空时返回 None
    """
    candidates = _candidates(db, exclude_id, media_filter)
    if not candidates:
        logger.debug(f"没有满足条件的随机媒体: exclude_id={exclude_id}")
        return None
    return random.choice(candidates)


async def find_random_media_id(
    db: Session,
    exclude_id: Optional[int],
    media_filter: Optional[MediaFilter] = None
) -> Optional[int]:
    """与 find_random_media 相同的选取规则，只返回文件ID（用于预加载）"""
    chosen = await find_random_media(db, exclude_id, media_filter)
    return chosen.id if chosen else None


async def search(db: Session, term: Optional[str]) -> List[File]:
    return await CatalogStore(db).search(term)
