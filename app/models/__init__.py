"""模型统一导出入口，供Alembic和业务代码调用"""
from .base import Base
from .author import Author
from .file import File
from .comment import Comment

# 暴露所有模型类，便于Alembic自动生成迁移脚本
__all__ = ["Base", "Author", "File", "Comment"]
