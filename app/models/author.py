from sqlalchemy import Column, String, Integer, BigInteger
from .base import Base

class Author(Base):
    """作者表（匿名身份，主键由客户端提供）"""
    __tablename__ = "authors"

    author_id = Column(BigInteger, primary_key=True, autoincrement=False, comment="客户端持有的作者标识")
    name = Column(String(100), nullable=False, comment="显示名称（首次创建时从名字池随机分配）")
    creation_date = Column(Integer, nullable=False, comment="首次接触时间（Unix 秒）")

    def __repr__(self):
        return f"<Author(author_id={self.author_id}, name={self.name})>"
