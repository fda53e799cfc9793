from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from app.utils.response import success_response
from app.extensions import get_db, get_content_root
from app.errors import AuthorNotFoundException, OperationFailedException
from app.schemas.request import RemovalRequest
from app.schemas.response import files_to_response
from app.services.catalog_service import CatalogStore
from app.services.file_management_service import FileManagementService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["作者"])


@router.post("/authors/delete")
async def delete_author_and_files(
    request: RemovalRequest,
    db: Session = Depends(get_db),
    content_root: str = Depends(get_content_root)
):
    """
    删除作者及其全部文件

    任何一个文件删除失败都会终止操作并返回失败，已删除的文件不会恢复
    """
    try:
        files = await FileManagementService.delete_author_cascade(request.id, db, content_root)
    except Exception as e:
        logger.error(f"删除作者失败: author_id={request.id}, error={e}")
        raise OperationFailedException("删除作者失败")
    return success_response(data=files_to_response(files))


@router.get("/names/{author_id}")
async def get_author_name(author_id: int, db: Session = Depends(get_db)):
    """查询拥有文件的作者的显示名称"""
    files = await CatalogStore(db).find_all_by(author_id)
    if not files or not files[0].author:
        raise AuthorNotFoundException(author_id)
    return success_response(data=files[0].author.name)
