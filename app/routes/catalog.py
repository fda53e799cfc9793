from fastapi import APIRouter, Depends, UploadFile, File as FormFile, Form
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from app.utils.response import success_response
from app.utils.validation import parse_author_token, parse_nsfw_flag, validate_positional_arrays
from app.extensions import get_db, get_content_root
from app.errors import FileNotFoundException, BadRequestException, OperationFailedException, UploadValidationError
from app.schemas.request import RandomMediaRequest
from app.schemas.response import (
    FacetsResponse, UploadResponse,
    author_to_response, file_to_response, files_to_response
)
from app.services.catalog_service import CatalogStore
from app.services.file_management_service import FileManagementService
from app.services.upload_service import UploadItem, upload_files
from app.services import selection_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["媒体库"])


async def _current_listing(db: Session) -> dict:
    """变更操作统一返回最新的完整文件列表"""
    files = await CatalogStore(db).find_all()
    return success_response(data=files_to_response(files))


def _require_confirmation(token: Optional[str]):
    if token is None or not str(token).strip():
        raise BadRequestException("缺少确认标识")


@router.get("/all/length")
async def get_length(db: Session = Depends(get_db)):
    """文件总数"""
    return success_response(data=await CatalogStore(db).count())


@router.get("/all")
async def get_all(db: Session = Depends(get_db)):
    """全部文件"""
    return await _current_listing(db)


@router.get("/all/facets")
async def get_facets(db: Session = Depends(get_db)):
    """全部文件夹、标签和文件类型（用于浏览页侧栏）"""
    store = CatalogStore(db)
    return success_response(data=FacetsResponse(
        folders=await store.list_folders(),
        tags=await store.list_tags(),
        types=await store.list_types()
    ))


@router.get("/all/search/{term}")
async def search_files(term: str, db: Session = Depends(get_db)):
    """按标题、标签、文件夹搜索"""
    files = await selection_service.search(db, term)
    return success_response(data=files_to_response(files))


@router.get("/all/by/{author_id}")
async def get_files_by_author(author_id: int, db: Session = Depends(get_db)):
    """某个作者的全部文件"""
    files = await CatalogStore(db).find_all_by(author_id)
    return success_response(data=files_to_response(files))


@router.get("/random")
async def get_random(db: Session = Depends(get_db)):
    """随机文件"""
    result = await selection_service.find_random(db)
    if not result:
        raise FileNotFoundException()
    return success_response(data=file_to_response(result))


@router.post("/random/media")
async def get_random_media(request: RandomMediaRequest, db: Session = Depends(get_db)):
    """
    按筛选条件随机选取下一个媒体

    参数：
    - fileId: 当前展示的文件，不会被选中
    - filter: 筛选条件（类型/标签/文件夹/屏蔽项/NSFW）
    """
    result = await selection_service.find_random_media(db, request.fileId, request.filter)
    if not result:
        raise FileNotFoundException()
    return success_response(data=file_to_response(result))


@router.post("/random/media/id")
async def get_random_media_id(request: RandomMediaRequest, db: Session = Depends(get_db)):
    """与 /random/media 相同，只返回文件ID"""
    result = await selection_service.find_random_media_id(db, request.fileId, request.filter)
    if result is None:
        raise FileNotFoundException()
    return success_response(data=result)


@router.get("/file/{file_id}")
async def get_file(file_id: int, db: Session = Depends(get_db)):
    """按ID查询文件"""
    result = await CatalogStore(db).find_one(file_id)
    if not result:
        raise FileNotFoundException(file_id)
    return success_response(data=file_to_response(result))


@router.get("/folder/{name}")
def get_folder(name: str, db: Session = Depends(get_db)):
    """按文件夹查询文件"""
    files = CatalogStore(db).find_folder(name)
    return success_response(data=files_to_response(files))


@router.post("/upload")
async def upload(
    file: Optional[List[UploadFile]] = FormFile(None, alias="File"),
    folder: Optional[List[str]] = Form(None, alias="Folder"),
    nsfw: Optional[List[str]] = Form(None, alias="NSFW"),
    title: Optional[List[str]] = Form(None, alias="Title"),
    tags: Optional[List[str]] = Form(None, alias="Tags"),
    description: Optional[List[str]] = Form(None, alias="Description"),
    id: Optional[str] = Form(None, alias="Id"),
    db: Session = Depends(get_db),
    content_root: str = Depends(get_content_root)
):
    """
    批量上传文件

    参数（multipart，按位置一一对应，字段名与网页端表单一致）：
    - File: 文件列表
    - Folder / NSFW: 与文件等长
    - Title / Tags / Description: 可选，提供时与文件等长
    - Id: 客户端作者标识

    返回：
    - 作者信息和上传后的完整文件列表
    """
    logger.info(f"上传请求: id={id}")
    if not file:
        raise BadRequestException("没有可上传的文件")

    author_token = parse_author_token(id)
    if author_token is None:
        raise BadRequestException("作者标识格式错误")

    folder = folder if folder is not None else [""] * len(file)
    nsfw = nsfw if nsfw is not None else ["0"] * len(file)
    if not validate_positional_arrays(file, folder, nsfw, title, tags, description):
        raise BadRequestException("文件与 folder/nsfw 等字段数量不一致")

    items = []
    for i, upload_file in enumerate(file):
        items.append(UploadItem(
            filename=upload_file.filename or "",
            content=await upload_file.read(),
            folder=folder[i],
            nsfw=parse_nsfw_flag(nsfw[i]),
            title=title[i] if title else None,
            tags=tags[i] if tags else None,
            description=description[i] if description else None
        ))

    try:
        author, files = await upload_files(db, author_token, items, content_root)
    except UploadValidationError as e:
        raise BadRequestException(str(e))
    except OSError as e:
        logger.error(f"上传写入失败: {e}")
        raise OperationFailedException("文件写入失败")

    return success_response(
        msg=f"已上传 {len(items)} 个文件",
        data=UploadResponse(author=author_to_response(author), files=files_to_response(files))
    )


@router.post("/delete/{file_id}")
async def delete_file(
    file_id: int,
    id: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    content_root: str = Depends(get_content_root)
):
    """删除文件（磁盘内容和记录一起删除）"""
    _require_confirmation(id)
    try:
        result = await FileManagementService.delete_file(file_id, db, content_root)
    except OSError as e:
        logger.error(f"删除文件 {file_id} 失败: {e}")
        raise OperationFailedException("文件删除失败")
    if result <= 0:
        raise FileNotFoundException(file_id)
    return await _current_listing(db)


@router.post("/update/{file_id}")
async def update_folder(
    file_id: int,
    id: Optional[str] = Form(None),
    folder: str = Form(""),
    db: Session = Depends(get_db)
):
    """修改文件所在文件夹"""
    _require_confirmation(id)
    result = await CatalogStore(db).update_folder(file_id, folder)
    if not result:
        raise FileNotFoundException(file_id)
    return await _current_listing(db)


@router.post("/update/like/{file_id}")
async def update_likes(file_id: int, id: Optional[str] = Form(None), db: Session = Depends(get_db)):
    """点赞数加一"""
    _require_confirmation(id)
    result = await CatalogStore(db).increment_likes(file_id)
    if not result:
        raise FileNotFoundException(file_id)
    return await _current_listing(db)


@router.post("/update/views/{file_id}")
async def update_views(file_id: int, id: Optional[str] = Form(None), db: Session = Depends(get_db)):
    """浏览数加一"""
    _require_confirmation(id)
    result = await CatalogStore(db).increment_views(file_id)
    if not result:
        raise FileNotFoundException(file_id)
    return await _current_listing(db)
