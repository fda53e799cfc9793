"""
查看数据库内容脚本

功能：
- 显示作者、文件、评论的数量统计
- 查看最近的文件记录（files 表）及其作者
- 显示各文件夹的文件数量

使用方法：
    python scripts/inspect/view_database.py
"""

import sys
import os

# 添加项目根目录到 Python 路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from datetime import datetime, timezone
from sqlalchemy import func
from app.extensions import SessionLocal
from app.models.author import Author
from app.models.file import File
from app.models.comment import Comment
import logging

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def format_unix(seconds):
    """格式化 Unix 时间"""
    if seconds is None:
        return "N/A"
    return datetime.fromtimestamp(seconds, timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')


def show_statistics(db):
    """显示统计信息"""
    print("\n" + "=" * 80)
    print("统计信息")
    print("=" * 80)
    print(f"  作者数: {db.query(Author).count()}")
    print(f"  文件数: {db.query(File).count()}")
    print(f"  NSFW 文件数: {db.query(File).filter(File.nsfw.is_(True)).count()}")
    print(f"  评论数: {db.query(Comment).count()}")
    print(f"  总点赞数: {db.query(func.coalesce(func.sum(File.likes), 0)).scalar()}")
    print(f"  总浏览数: {db.query(func.coalesce(func.sum(File.views), 0)).scalar()}")


def show_files(db, limit=20):
    """显示最近的文件记录"""
    print("\n" + "=" * 80)
    print(f"文件记录 (files 表) - 最近 {limit} 条")
    print("=" * 80)

    files = db.query(File).order_by(File.id.desc()).limit(limit).all()
    if not files:
        print("  无文件记录")
        return

    for file in files:
        author = file.author
        print(f"  [{file.id}] {file.file_url}")
        print(f"    标题: {file.title}  文件夹: {file.folder or '-'}  标签: {file.tags or '-'}")
        print(f"    NSFW: {'是' if file.nsfw else '否'}  点赞: {file.likes}  浏览: {file.views}")
        if author:
            print(f"    作者: {author.name} ({author.author_id}), 创建于 {format_unix(author.creation_date)}")


def show_folders(db):
    """显示各文件夹的文件数量"""
    print("\n" + "=" * 80)
    print("文件夹")
    print("=" * 80)

    rows = (
        db.query(File.folder, func.count(File.id))
        .group_by(File.folder)
        .order_by(func.count(File.id).desc())
        .all()
    )
    if not rows:
        print("  无文件夹")
        return
    for folder, count in rows:
        print(f"  {folder or '(未分组)'}: {count}")


def main():
    """主函数"""
    print("=" * 80)
    print("数据库内容查看工具")
    print("=" * 80)
    print(f"查看时间: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")

    db = SessionLocal()
    try:
        show_statistics(db)
        show_files(db)
        show_folders(db)

        print("\n" + "=" * 80)
        print("查看完成")
        print("=" * 80)
    finally:
        db.close()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n用户中断")
    except Exception as e:
        logger.error(f"执行失败: {e}", exc_info=True)
        print(f"\n执行失败: {e}")
