import os
import re
from typing import Optional, Sequence


def parse_int_field(value) -> Optional[int]:
    """
    解析表单中的整数字段

    规则：十进制整数（允许前后空白）
    - "42"  → 42
    - " 7 " → 7
    - "abc" → None
    - None  → None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not re.match(r'^-?\d+$', text):
        return None
    return int(text)


def parse_author_token(token) -> Optional[int]:
    """解析客户端提交的作者标识"""
    return parse_int_field(token)


def sanitize_filename(filename: str) -> str:
    """
    清理上传文件名：去掉首尾空白并删除所有空白字符

    只保留最后一段文件名，不做其他规范化（同名文件会互相覆盖）；
    "." 和 ".." 视为无效，返回空字符串
    """
    name = re.sub(r'\s+', '', (filename or "").strip())
    name = os.path.basename(name.replace("\\", "/"))
    if name in (".", ".."):
        return ""
    return name


def parse_nsfw_flag(value) -> bool:
    """解析表单中的 NSFW 标记（"1"/"0"/"true"/"false"）"""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def normalize_tags(value: Optional[str]) -> str:
    """标签统一为逗号分隔、空白替换为下划线"""
    if not value:
        return ""
    tags = []
    for raw in value.split(","):
        tag = re.sub(r'\s+', '_', raw.strip())
        if tag:
            tags.append(tag)
    return ",".join(tags)


def validate_positional_arrays(files: Sequence, *others: Optional[Sequence]) -> bool:
    """上传批次中与文件按位置对应的数组必须等长（未提供的数组跳过）"""
    expected = len(files)
    for values in others:
        if values is None:
            continue
        if len(values) != expected:
            return False
    return True
