from pydantic import BaseModel, Field
from typing import Optional, List


class MediaFilter(BaseModel):
    """随机媒体筛选条件（各条件之间为“与”关系，空条件表示不限制）"""
    types: List[str] = Field(default_factory=list, description="允许的文件类型（扩展名）")
    tags: List[str] = Field(default_factory=list, description="至少包含其中一个标签")
    folder: Optional[str] = Field(None, description="文件夹精确匹配")
    excluded: List[str] = Field(default_factory=list, description="屏蔽的标签或文件夹")
    nsfw: Optional[bool] = Field(None, description="None=不限，False=仅普通内容，True=仅NSFW")

    def matches(self, file) -> bool:
        """判断文件是否满足筛选条件"""
        if self.types:
            allowed = {t.lower().lstrip(".") for t in self.types}
            if file.file_type not in allowed:
                return False

        file_tags = set(file.tag_list)
        if self.tags and not file_tags.intersection(self.tags):
            return False

        if self.folder is not None and file.folder != self.folder:
            return False

        if self.excluded:
            blocked = set(self.excluded)
            if file_tags.intersection(blocked) or (file.folder and file.folder in blocked):
                return False

        if self.nsfw is not None and bool(file.nsfw) != self.nsfw:
            return False

        return True


class RandomMediaRequest(BaseModel):
    """随机媒体请求模型"""
    fileId: Optional[int] = Field(None, description="当前正在展示、需要排除的文件ID")
    filter: MediaFilter = Field(default_factory=MediaFilter, description="筛选条件")


class RemovalRequest(BaseModel):
    """删除作者（及其全部文件）请求模型"""
    id: int = Field(..., description="作者ID")
