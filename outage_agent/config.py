"""
配置加载模块

从 config.yaml 加载配置，支持 Pydantic 验证和环境变量指定路径。
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

# 作为 TTL 使用，但判定时等待 ttl*2：15 分钟的一半，第一次告警大约在 15 分钟后
DEFAULT_ASSET_EXPIRATION_TIME_SEC = 15 * 60 // 2


class CacheConfig(BaseModel):
    """存活缓存配置"""
    default_ttl: int = Field(default=DEFAULT_ASSET_EXPIRATION_TIME_SEC, ge=0)
    verbose: bool = False


class CheckerConfig(BaseModel):
    """离线检查配置"""
    interval: int = Field(default=30, ge=1)


class APIConfig(BaseModel):
    """API 服务配置"""
    host: str = "0.0.0.0"
    port: int = 9110
    admin_token: str = "CHANGE_ME_IN_PRODUCTION"


class LoggingConfig(BaseModel):
    """日志配置"""
    level: str = "INFO"
    file: Optional[str] = None


class AppConfig(BaseModel):
    """应用配置（完整配置）"""
    cache: CacheConfig = Field(default_factory=CacheConfig)
    checker: CheckerConfig = Field(default_factory=CheckerConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    加载配置文件

    优先级：
    1. 参数指定的路径
    2. 环境变量 OUTAGE_AGENT_CONFIG
    3. 默认路径 config.yaml
    """
    if config_path is None:
        config_path = os.environ.get("OUTAGE_AGENT_CONFIG", "config.yaml")

    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
            if raw_config is not None:
                # 日志文件的相对路径以配置文件所在目录为准，不依赖 CWD
                logging_section = raw_config.get("logging") if isinstance(raw_config, dict) else None
                if isinstance(logging_section, dict):
                    log_file = logging_section.get("file")
                    if isinstance(log_file, str) and log_file and not Path(log_file).is_absolute():
                        logging_section["file"] = str((config_file.resolve().parent / log_file).resolve())

                # 顶层不是映射时同样抛出 ValidationError
                return AppConfig.model_validate(raw_config)

    # 配置文件不存在时使用默认配置
    return AppConfig()


# 全局配置实例（延迟加载）
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """获取全局配置实例（单例模式）"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config():
    """重置配置（主要用于测试）"""
    global _config
    _config = None
