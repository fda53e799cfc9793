from typing import Any


def success_response(data: Any = None, msg: str = "success") -> dict:
    """成功响应"""
    return {
        "code": 200,
        "msg": msg,
        "data": data
    }


def error_response(code: int = 400, msg: str = "请求错误", data: Any = None) -> dict:
    """错误响应"""
    return {
        "code": code,
        "msg": msg,
        "data": data
    }
