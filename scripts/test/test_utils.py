"""
测试工具模块 - 提供统一的日志格式和测试数据构造函数

所有测试脚本都可以导入此模块使用。
"""

import asyncio
import inspect
import logging
import os
import sys
import tempfile
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# 定义颜色代码（如果终端支持）
class Colors:
    GREEN = '\033[92m'    # 成功 - 绿色
    RED = '\033[91m'      # 错误 - 红色
    BLUE = '\033[94m'     # 信息 - 蓝色
    CYAN = '\033[96m'     # 章节标题 - 青色
    BOLD = '\033[1m'      # 加粗
    RESET = '\033[0m'     # 重置

SUPPORTS_COLOR = hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()

def _colorize(text, color):
    """为文本添加颜色（如果支持）"""
    if SUPPORTS_COLOR:
        return f"{color}{text}{Colors.RESET}"
    return text


def log_section(title, char="═", length=70):
    """记录一个新的测试章节"""
    title_line = f" 🔹 {title} "
    padding = max((length - len(title_line)) // 2, 0)
    logger.info(f"{char * padding}{_colorize(title_line, Colors.CYAN + Colors.BOLD)}{char * padding}")


def log_test_start(test_name):
    """记录测试开始"""
    logger.info(f"开始执行: {_colorize(f'🧪 {test_name}', Colors.BLUE + Colors.BOLD)}")


def log_success(message):
    """记录成功消息"""
    logger.info(_colorize(f"✅ {message}", Colors.GREEN + Colors.BOLD))


def log_error(message):
    """记录错误消息"""
    logger.error(_colorize(f"❌ {message}", Colors.RED + Colors.BOLD))


def log_info(message):
    """记录信息消息"""
    logger.info(_colorize(f"ℹ️  {message}", Colors.BLUE))


@contextmanager
def temporary_environment():
    """
    直接运行测试脚本时构造与 pytest 夹具相同的环境

    返回的字典包含 engine / session_factory / db / content_root / client
    """
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker
    from app.models import Base

    with tempfile.TemporaryDirectory() as tmp:
        content_root = os.path.join(tmp, "content")
        os.makedirs(content_root)
        engine = create_engine(f"sqlite:///{os.path.join(tmp, 'catalog.db')}")
        Base.metadata.create_all(bind=engine)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        db = session_factory()
        env = {
            "engine": engine,
            "session_factory": session_factory,
            "db": db,
            "content_root": content_root,
        }
        try:
            yield env
        finally:
            db.close()
            engine.dispose()


def build_client(session_factory, content_root):
    """构造指向测试数据库和测试目录的 TestClient"""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.extensions import get_db, get_content_root

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_content_root] = lambda: content_root
    return TestClient(app)


def run_tests(section_name, tests):
    """
    直接运行（不经过 pytest）时的简单执行器

    按测试函数的参数名注入 db / content_root / session_factory / client 等

    Returns:
        是否全部通过
    """
    log_section(section_name)
    passed = 0
    for test_func in tests:
        with temporary_environment() as env:
            params = inspect.signature(test_func).parameters
            if "client" in params:
                env["client"] = build_client(env["session_factory"], env["content_root"])
            kwargs = {name: env[name] for name in params}
            log_test_start(test_func.__name__)
            try:
                test_func(**kwargs)
                passed += 1
                log_success(test_func.__name__)
            except Exception as e:
                log_error(f"测试 {test_func.__name__} 失败: {e!r}")
            finally:
                if "client" in env:
                    from app.main import app
                    app.dependency_overrides.clear()
    log_info(f"{section_name} 通过: {passed}/{len(tests)}")
    return passed == len(tests)


def run(coro):
    """在同步测试中执行异步服务函数"""
    return asyncio.run(coro)


def create_test_author(db, author_id, name="Tester", creation_date=1700000000):
    """创建测试作者"""
    from app.models.author import Author
    author = Author(author_id=author_id, name=name, creation_date=creation_date)
    db.add(author)
    db.commit()
    db.refresh(author)
    return author


def create_test_file(db, content_root, author_id, filename, folder="", tags="", nsfw=False,
                     title=None, content=b"test-bytes"):
    """创建测试文件（写入磁盘内容并插入记录）"""
    from app.config import settings
    from app.models.file import File
    file_url = f"{settings.UPLOAD_SUBDIR}/{filename}"
    target = os.path.join(content_root, file_url)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    with open(target, "wb") as f:
        f.write(content)

    file_record = File(
        author_id=author_id,
        file_url=file_url,
        title=title or filename,
        description="",
        tags=tags,
        folder=folder,
        nsfw=nsfw,
        likes=0,
        views=0
    )
    db.add(file_record)
    db.commit()
    db.refresh(file_record)
    return file_record


def file_path(content_root, file_record_or_url):
    """文件记录在磁盘上的绝对路径"""
    file_url = getattr(file_record_or_url, "file_url", file_record_or_url)
    return os.path.join(content_root, file_url)
