"""
应用配置模块
"""

from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """应用设置"""

    # 基础设置
    APP_NAME: str = "Rankdown"
    VERSION: str = "1.0.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # 服务器设置
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # 快照来源：http(s) URL 或本地文件路径
    SNAPSHOT_SOURCE: str = "./state.json"

    # 刷新设置
    REFRESH_INTERVAL_SEC: int = 20  # 自动刷新间隔（秒）
    FETCH_TIMEOUT_SEC: float = 10.0  # 单次拉取超时（秒）

    # 拉取失败时是否保留上一次成功的快照（False = 直接显示错误页）
    KEEP_LAST_GOOD_ON_ERROR: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

# 全局设置实例
settings = Settings()
