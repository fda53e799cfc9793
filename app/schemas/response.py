from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class AuthorResponse(BaseModel):
    """作者信息响应模型"""
    authorId: Optional[int] = None
    name: str
    creationDate: int


class FileInfoResponse(BaseModel):
    """文件信息响应模型"""
    id: int
    fileUrl: str
    fileType: str
    title: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []
    folder: str = ""
    nsfw: bool
    likes: int
    views: int
    author: Optional[AuthorResponse] = None
    createdAt: Optional[datetime] = None


class CommentResponse(BaseModel):
    """评论响应模型"""
    id: int
    fileId: int
    author: AuthorResponse
    content: str
    date: int


class FacetsResponse(BaseModel):
    """目录统计（文件夹/标签/类型）响应模型"""
    folders: List[str]
    tags: List[str]
    types: List[str]


class UploadResponse(BaseModel):
    """上传结果响应模型"""
    author: AuthorResponse
    files: List[FileInfoResponse]


def author_to_response(author) -> AuthorResponse:
    return AuthorResponse(
        authorId=author.author_id,
        name=author.name,
        creationDate=author.creation_date
    )


def file_to_response(file) -> FileInfoResponse:
    return FileInfoResponse(
        id=file.id,
        fileUrl=file.file_url,
        fileType=file.file_type,
        title=file.title,
        description=file.description,
        tags=file.tag_list,
        folder=file.folder or "",
        nsfw=bool(file.nsfw),
        likes=file.likes or 0,
        views=file.views or 0,
        author=author_to_response(file.author) if file.author else None,
        createdAt=file.created_at
    )


def files_to_response(files) -> List[FileInfoResponse]:
    return [file_to_response(f) for f in files]


def comment_to_response(comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        fileId=comment.file_id,
        author=AuthorResponse(
            authorId=comment.author_id,
            name=comment.author_name,
            creationDate=comment.author_creation_date
        ),
        content=comment.content,
        date=comment.date
    )
