import os
from sqlalchemy import Column, Integer, String, BigInteger, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel
from .author import Author

class File(BaseModel):
    """媒体文件表"""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="文件唯一ID")
    author_id = Column(
        BigInteger,
        ForeignKey("authors.author_id"),
        nullable=False,
        index=True,
        comment="上传者作者ID"
    )
    file_url = Column(String(512), nullable=False, comment="相对内容根目录的存储路径")
    title = Column(String(255), comment="标题（默认原始文件名）")
    description = Column(Text, comment="描述")
    tags = Column(String(512), default="", comment="标签，逗号分隔")
    folder = Column(String(255), default="", comment="分组文件夹（可修改）")
    nsfw = Column(Boolean, default=False, nullable=False, comment="是否为NSFW内容")
    likes = Column(Integer, default=0, nullable=False, comment="点赞数")
    views = Column(Integer, default=0, nullable=False, comment="浏览数")

    # 多个文件 → 一个作者（按引用关联）
    author = relationship("Author", backref="files", lazy="joined")

    @property
    def file_type(self) -> str:
        """文件类型（小写扩展名，不含点）"""
        return os.path.splitext(self.file_url or "")[1].lstrip(".").lower()

    @property
    def tag_list(self) -> list:
        if not self.tags:
            return []
        return [t for t in self.tags.split(",") if t]

    def __repr__(self):
        return f"<File(id={self.id}, file_url={self.file_url})>"
