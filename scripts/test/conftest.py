"""
pytest 公共夹具

- 每个测试使用独立的临时 SQLite 数据库和临时内容根目录
- client 夹具通过依赖覆盖把 FastAPI 应用指向测试数据库和测试目录
"""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# 添加项目根目录和测试目录到路径
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

# 导入 app 之前指定数据库，避免测试依赖 MySQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

from app.models import Base


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def content_root(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    return str(root)


@pytest.fixture
def client(session_factory, content_root):
    from app.main import app
    from test_utils import build_client

    try:
        yield build_client(session_factory, content_root)
    finally:
        app.dependency_overrides.clear()
