import time


def unix_now() -> int:
    """当前 Unix 时间（秒）"""
    return int(time.time())
