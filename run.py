import logging
import uvicorn
import socket
from app.config import settings

def get_local_ip():
    """获取本机内网IP"""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"

if __name__ == "__main__":
    local_ip = get_local_ip()
    log_level = settings.LOG_LEVEL.lower()

    # 配置日志
    logging.basicConfig(
        level=log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    print("=" * 50)
    print(f"🚀 {settings.APP_NAME} API服务器")
    print("=" * 50)
    print(f"   • http://127.0.0.1:8000")
    print(f"   • http://{local_ip}:8000")
    print(f"   • 文档: http://{local_ip}:8000/docs")
    print(f"   • 健康检查: http://{local_ip}:8000/health")
    print(f"   • 内容根目录: {settings.CONTENT_ROOT}")
    print("=" * 50)

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=log_level
    )
