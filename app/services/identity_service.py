import random
from typing import Optional
from sqlalchemy.orm import Session
from app.models.author import Author
from app.utils.datetime_util import unix_now
import logging

logger = logging.getLogger(__name__)

ANONYMOUS_NAME = "Anonymous"

# 新作者的显示名称池（首次接触时随机分配）
FAKE_NAMES = [
    "Akari", "Ayase", "Chika", "Chitose", "Emilia", "Hanako", "Haruka",
    "Hibiki", "Hikari", "Himari", "Hinata", "Honoka", "Ichika", "Iroha",
    "Kaede", "Kanade", "Kaori", "Kokona", "Kotori", "Mai", "Makoto",
    "Mashiro", "Megumi", "Midori", "Mio", "Misaki", "Miyu", "Momo",
    "Nagisa", "Nanami", "Natsuki", "Nozomi", "Rei", "Rin", "Ruri",
    "Sakura", "Sayori", "Shiori", "Sora", "Suzu", "Tomoe", "Tsubaki",
    "Umi", "Yui", "Yuki", "Yuzu",
]


def find_author(db: Session, author_id: int) -> Optional[Author]:
    """按作者ID查询作者，不存在时返回 None"""
    return db.query(Author).filter(Author.author_id == author_id).first()


def pick_fake_name() -> str:
    return random.choice(FAKE_NAMES)


async def resolve_or_create(db: Session, token: int) -> Author:
    """
    将客户端持有的作者标识解析为作者记录，首次接触时创建

    注意：同一个新标识的两个并发请求可能各自创建一次（由数据库主键冲突兜底），
    这里不加进程内锁

    Args:
        token: 已解析为整数的作者标识
        db: 数据库会话

    Returns:
        已持久化的作者记录
    """
    author = find_author(db, token)
    if author:
        return author

    author = Author(
        author_id=token,
        name=pick_fake_name(),
        creation_date=unix_now()
    )
    db.add(author)
    db.commit()
    db.refresh(author)

    logger.info(f"创建新作者: author_id={author.author_id}, name={author.name}, creation_date={author.creation_date}")
    return author


def anonymous_author() -> Author:
    """构造匿名作者（不入库，每次使用新的创建时间）"""
    return Author(
        author_id=None,
        name=ANONYMOUS_NAME,
        creation_date=unix_now()
    )
