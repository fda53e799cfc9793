from sqlalchemy import Column, Integer, String, BigInteger, Text, ForeignKey
from sqlalchemy.orm import relationship, backref
from .base import BaseModel
from .file import File

class Comment(BaseModel):
    """文件评论表"""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="评论ID")
    file_id = Column(
        Integer,
        ForeignKey("files.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="关联文件ID"
    )
    author_id = Column(
        BigInteger,
        ForeignKey("authors.author_id", ondelete="SET NULL"),
        nullable=True,
        comment="评论者作者ID（匿名评论为空）"
    )
    author_name = Column(String(100), nullable=False, comment="评论时的作者名称")
    author_creation_date = Column(Integer, nullable=False, comment="评论时的作者创建时间（Unix 秒）")
    content = Column(Text, nullable=False, comment="评论内容")
    date = Column(Integer, nullable=False, comment="客户端提交的评论时间（Unix 秒）")

    # 删除文件时一并删除其评论
    file = relationship(
        "File",
        backref=backref("comments", cascade="all, delete-orphan", order_by="Comment.id")
    )

    def __repr__(self):
        return f"<Comment(id={self.id}, file_id={self.file_id})>"
