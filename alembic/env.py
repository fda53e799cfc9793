# alembic/env.py
from logging.config import fileConfig
import sys
from pathlib import Path

from sqlalchemy import engine_from_config, pool
from alembic import context

# -------------------------- 核心配置：添加项目路径 + 导入模型 --------------------------
# __file__ = alembic/env.py → 父目录是alembic → 再父目录是项目根目录
sys.path.append(str(Path(__file__).resolve().parent.parent))

# 从模型统一入口导入Base（__init__.py已导出所有模型）
from app.models import Base
from app.config import settings

config = context.config

# 配置日志（读取alembic.ini中的日志设置）
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# 数据库地址以应用配置为准（环境变量 / .env），与应用保持一致
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

# 关键：指定Alembic要识别的模型元数据（必须是Base.metadata）
target_metadata = Base.metadata


def _connect_args() -> dict:
    # 只有 MySQL 需要显式指定字符集
    if settings.DATABASE_URL.startswith("mysql"):
        return {"charset": "utf8mb4"}
    return {}


def run_migrations_offline() -> None:
    """
    离线模式：仅需数据库URL，无需实际连接数据库
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    在线模式：需要创建数据库引擎并建立连接
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,  # 迁移脚本无需连接池
        connect_args=_connect_args()
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",  # SQLite 不支持直接修改列
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
