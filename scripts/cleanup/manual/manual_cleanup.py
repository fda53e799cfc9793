"""
手动对账脚本

功能：
- 找出上传目录中没有文件记录的孤立内容
- 找出有记录但磁盘上缺少内容的文件
- 可选删除孤立内容（--remove-orphans）

使用方法：
    python scripts/cleanup/manual/manual_cleanup.py
    python scripts/cleanup/manual/manual_cleanup.py --remove-orphans
"""

import sys
import os
import argparse

# 添加项目根目录到 Python 路径
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from app.extensions import SessionLocal
from app.services.cleanup_service import reconcile_content_store
from app.config import settings
import logging

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="上传目录与文件记录对账")
    parser.add_argument("--remove-orphans", action="store_true", help="删除没有文件记录的孤立内容")
    parser.add_argument("--content-root", default=settings.CONTENT_ROOT, help="内容根目录")
    args = parser.parse_args()

    print("=" * 60)
    print("上传目录对账")
    print("=" * 60)
    print(f"  • 内容根目录: {args.content_root}")
    print(f"  • 上传子目录: {settings.UPLOAD_SUBDIR}")

    db = SessionLocal()
    try:
        result = reconcile_content_store(db, args.content_root, remove_orphans=args.remove_orphans)
    finally:
        db.close()

    print(f"\n文件记录数: {result['records']}")

    print(f"\n孤立内容（无记录）: {len(result['orphans'])}")
    for path in result["orphans"]:
        print(f"  - {path}")

    print(f"\n缺失内容（有记录无文件）: {len(result['missing'])}")
    for item in result["missing"]:
        print(f"  - [{item['fileId']}] {item['fileUrl']}")

    if args.remove_orphans:
        print(f"\n已删除孤立内容: {result['removedOrphans']}")

    print("=" * 60)
    return 0 if not result["missing"] else 1


if __name__ == "__main__":
    sys.exit(main())
