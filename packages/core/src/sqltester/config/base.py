"""
ConsoleConfig - 分层配置系统
优先级（高到低）：运行时覆盖 > 环境变量 > YAML配置文件 > 内置默认值
"""

import os
import secrets
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..utils.errors import ConfigurationError

ENV_PREFIX = "SQLTESTER_"
CONFIG_FILE_ENV = "SQLTESTER_CONFIG"
DEFAULT_CONFIG_FILE = "sqltester.yaml"


class ConfigSource(ABC):
    """配置源接口"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """获取配置值，不存在时返回None"""
        pass

    @abstractmethod
    def get_all(self) -> Dict[str, Any]:
        """获取全部配置"""
        pass


class DefaultConfigSource(ConfigSource):
    """内置默认值"""

    DEFAULTS: Dict[str, Any] = {
        "host": "127.0.0.1",
        "port": 3000,
        "session_cookie": "sqltester_session",
        "session_max_age": 14 * 24 * 60 * 60,
        "cors_origins": "*",
        "log_level": "INFO",
        "log_format": "text",
        "log_file": None,
        "static_dir": None,
    }

    def get(self, key: str) -> Optional[Any]:
        return self.DEFAULTS.get(key)

    def get_all(self) -> Dict[str, Any]:
        return self.DEFAULTS.copy()


class EnvConfigSource(ConfigSource):
    """环境变量配置源，例如 SQLTESTER_PORT=8080 对应 port"""

    def __init__(self, prefix: str = ENV_PREFIX):
        self.prefix = prefix

    def get(self, key: str) -> Optional[Any]:
        env_key = self.prefix + key.replace(".", "_").upper()
        value = os.environ.get(env_key)
        return value if value not in (None, "") else None

    def get_all(self) -> Dict[str, Any]:
        return {
            name[len(self.prefix):].lower(): value
            for name, value in os.environ.items()
            if name.startswith(self.prefix) and name != CONFIG_FILE_ENV
        }


class YamlFileConfigSource(ConfigSource):
    """YAML文件配置源，支持点号路径访问嵌套键（如 server.port）"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(str(self.path), f"Invalid YAML in {self.path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(str(self.path), f"Config file {self.path} must contain a mapping")
        return data

    def get(self, key: str) -> Optional[Any]:
        if key in self._data:
            return self._data[key]
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get_all(self) -> Dict[str, Any]:
        return dict(self._data)


class ConsoleConfig:
    """
    控制台配置
    - 多配置源按优先级查询
    - 常用配置项以属性形式提供并做类型转换
    """

    def __init__(self, config_file: Optional[Path] = None):
        if config_file is None:
            config_file = Path(os.environ.get(CONFIG_FILE_ENV) or Path.cwd() / DEFAULT_CONFIG_FILE)

        self.config_file = Path(config_file)
        self.config_sources: List[ConfigSource] = [
            EnvConfigSource(),
            YamlFileConfigSource(self.config_file),
            DefaultConfigSource(),
        ]
        # 未配置会话密钥时每个进程随机生成，重启后旧cookie失效
        self._generated_secret = secrets.token_hex(32)

    def get(self, key: str, default: Any = None) -> Any:
        """按优先级获取配置值"""
        for source in self.config_sources:
            value = source.get(key)
            if value is not None:
                return value
        return default

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key, default)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(key, f"Config value '{key}' must be an integer, got {value!r}")

    def get_list(self, key: str) -> List[str]:
        """逗号分隔字符串或YAML列表"""
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return [str(item) for item in value]

    @property
    def host(self) -> str:
        return str(self.get("host"))

    @property
    def port(self) -> int:
        return self.get_int("port")

    @property
    def session_secret(self) -> str:
        return str(self.get("session_secret") or self._generated_secret)

    @property
    def session_cookie(self) -> str:
        return str(self.get("session_cookie"))

    @property
    def session_max_age(self) -> int:
        return self.get_int("session_max_age")

    @property
    def cors_origins(self) -> List[str]:
        return self.get_list("cors_origins")

    @property
    def log_level(self) -> str:
        return str(self.get("log_level")).upper()

    @property
    def log_format(self) -> str:
        log_format = str(self.get("log_format")).lower()
        if log_format not in ("text", "json"):
            raise ConfigurationError("log_format", f"log_format must be 'text' or 'json', got {log_format!r}")
        return log_format

    @property
    def log_file(self) -> Optional[str]:
        return self.get("log_file")

    @property
    def static_dir(self) -> Optional[Path]:
        value = self.get("static_dir")
        return Path(value) if value else None
