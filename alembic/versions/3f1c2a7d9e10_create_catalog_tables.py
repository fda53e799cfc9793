"""create authors, files and comments tables

Revision ID: 3f1c2a7d9e10
Revises:
Create Date: 2026-10-17 10:12:31.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'authors',
        sa.Column('author_id', sa.BigInteger(), autoincrement=False, nullable=False, comment='客户端持有的作者标识'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='显示名称（首次创建时从名字池随机分配）'),
        sa.Column('creation_date', sa.Integer(), nullable=False, comment='首次接触时间（Unix 秒）'),
        sa.PrimaryKeyConstraint('author_id')
    )
    op.create_table(
        'files',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='文件唯一ID'),
        sa.Column('author_id', sa.BigInteger(), nullable=False, comment='上传者作者ID'),
        sa.Column('file_url', sa.String(length=512), nullable=False, comment='相对内容根目录的存储路径'),
        sa.Column('title', sa.String(length=255), nullable=True, comment='标题（默认原始文件名）'),
        sa.Column('description', sa.Text(), nullable=True, comment='描述'),
        sa.Column('tags', sa.String(length=512), nullable=True, comment='标签，逗号分隔'),
        sa.Column('folder', sa.String(length=255), nullable=True, comment='分组文件夹（可修改）'),
        sa.Column('nsfw', sa.Boolean(), nullable=False, comment='是否为NSFW内容'),
        sa.Column('likes', sa.Integer(), nullable=False, comment='点赞数'),
        sa.Column('views', sa.Integer(), nullable=False, comment='浏览数'),
        sa.Column('created_at', sa.DateTime(), nullable=True, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(), nullable=True, comment='更新时间'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.author_id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_files_author_id', 'files', ['author_id'])
    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='评论ID'),
        sa.Column('file_id', sa.Integer(), nullable=False, comment='关联文件ID'),
        sa.Column('author_id', sa.BigInteger(), nullable=True, comment='评论者作者ID（匿名评论为空）'),
        sa.Column('author_name', sa.String(length=100), nullable=False, comment='评论时的作者名称'),
        sa.Column('author_creation_date', sa.Integer(), nullable=False, comment='评论时的作者创建时间（Unix 秒）'),
        sa.Column('content', sa.Text(), nullable=False, comment='评论内容'),
        sa.Column('date', sa.Integer(), nullable=False, comment='客户端提交的评论时间（Unix 秒）'),
        sa.Column('created_at', sa.DateTime(), nullable=True, comment='创建时间'),
        sa.Column('updated_at', sa.DateTime(), nullable=True, comment='更新时间'),
        sa.ForeignKeyConstraint(['file_id'], ['files.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.author_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_comments_file_id', 'comments', ['file_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_comments_file_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_files_author_id', table_name='files')
    op.drop_table('files')
    op.drop_table('authors')
