from fastapi import APIRouter, Depends, Form
from sqlalchemy.orm import Session
from typing import Optional
import logging
from app.utils.response import success_response
from app.utils.validation import parse_author_token, parse_int_field
from app.extensions import get_db
from app.errors import FileNotFoundException, CommentNotFoundException, BadRequestException
from app.schemas.response import comment_to_response
from app.services.catalog_service import CatalogStore
from app.services.identity_service import find_author, anonymous_author

logger = logging.getLogger(__name__)

router = APIRouter(tags=["评论"], prefix="/comments")


async def _comment_listing(store: CatalogStore, file_id: int) -> dict:
    comments = await store.find_comments_for_file(file_id)
    return success_response(data=[comment_to_response(c) for c in comments])


@router.get("/{file_id}/all")
async def get_comments(file_id: int, db: Session = Depends(get_db)):
    """文件的全部评论"""
    return await _comment_listing(CatalogStore(db), file_id)


@router.post("/{file_id}")
async def add_comment(
    file_id: int,
    id: Optional[str] = Form(None),
    content: str = Form(""),
    date: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """
    添加评论

    参数：
    - id: 评论者的作者标识（未知标识按匿名处理）
    - content: 评论内容
    - date: 客户端提交时间（Unix 秒，原样保存）
    """
    if id is None:
        raise BadRequestException("缺少作者标识")

    comment_date = parse_int_field(date)
    if comment_date is None:
        raise BadRequestException("评论时间格式错误")

    store = CatalogStore(db)
    if not await store.find_one(file_id):
        raise FileNotFoundException(file_id)

    author = None
    author_token = parse_author_token(id)
    if author_token is not None:
        author = find_author(db, author_token)
    if author is None:
        author = anonymous_author()

    await store.insert_comment(file_id, author, content, comment_date)
    logger.info(f"新增评论: file_id={file_id}, author={author.name}")
    return await _comment_listing(store, file_id)


@router.post("/{file_id}/delete")
async def delete_comment(
    file_id: int,
    id: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """删除评论（id 为评论ID，只能删除属于该文件的评论）"""
    comment_id = parse_int_field(id)
    if comment_id is None:
        raise BadRequestException("评论ID格式错误")

    store = CatalogStore(db)
    if not await store.find_one(file_id):
        raise FileNotFoundException(file_id)

    if not await store.delete_comment(comment_id, file_id):
        raise CommentNotFoundException(comment_id)
    return await _comment_listing(store, file_id)
