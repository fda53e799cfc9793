from fastapi import HTTPException


class CustomHTTPException(HTTPException):
    def __init__(self, status_code=400, detail="请求错误", code=None, msg=None):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code if code is not None else status_code
        self.msg = msg if msg is not None else detail

class FileNotFoundException(CustomHTTPException):
    def __init__(self, file_id=None):
        detail = f"文件 {file_id} 不存在" if file_id is not None else "文件不存在"
        super().__init__(status_code=404, detail=detail, code=404, msg="文件不存在")

class AuthorNotFoundException(CustomHTTPException):
    def __init__(self, author_id=None):
        detail = f"作者 {author_id} 不存在" if author_id is not None else "作者不存在"
        super().__init__(status_code=404, detail=detail, code=404, msg="作者不存在")

class CommentNotFoundException(CustomHTTPException):
    def __init__(self, comment_id=None):
        detail = f"评论 {comment_id} 不存在" if comment_id is not None else "评论不存在"
        super().__init__(status_code=404, detail=detail, code=404, msg="评论不存在")

class BadRequestException(CustomHTTPException):
    def __init__(self, msg="请求参数错误"):
        super().__init__(status_code=400, detail=msg, code=400, msg=msg)

class OperationFailedException(CustomHTTPException):
    """操作失败（级联删除中途出错、磁盘不可用等），对调用方只暴露“失败”这一结果"""
    def __init__(self, msg="操作失败"):
        super().__init__(status_code=404, detail=msg, code=404, msg=msg)


class CatalogError(Exception):
    """媒体库业务异常基类"""

class AuthorHasFilesError(CatalogError):
    def __init__(self, author_id: int, remaining: int):
        super().__init__(f"作者 {author_id} 仍有 {remaining} 个文件，不能删除")
        self.author_id = author_id
        self.remaining = remaining

class UploadValidationError(CatalogError):
    """上传批次校验失败（空批次、数组长度不一致等）"""
