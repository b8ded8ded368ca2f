"""
TestConfig - 测试专用配置类
继承ConsoleConfig但支持运行时配置覆盖
"""

from pathlib import Path
from typing import Any, Dict, Optional

from .base import ConsoleConfig, ConfigSource


class TestConfigSource(ConfigSource):
    """测试配置源 - 最高优先级，用于测试时覆盖配置"""

    __test__ = False

    def __init__(self, test_config: Dict[str, Any]):
        self._test_config = test_config

    def get(self, key: str) -> Optional[Any]:
        return self._test_config.get(key)

    def get_all(self) -> Dict[str, Any]:
        return self._test_config.copy()


class TestConfig(ConsoleConfig):
    """
    测试专用配置类
    - 继承完整的分层配置系统
    - 覆盖值优先于环境变量和配置文件
    """

    # 避免pytest把该类当作测试用例收集
    __test__ = False

    def __init__(self, config_file: Optional[Path] = None, test_overrides: Optional[Dict[str, Any]] = None):
        """
        参数:
            config_file: 配置文件路径，默认使用不存在的路径以隔离本地配置
            test_overrides: 测试覆盖配置，具有最高优先级
        """
        super().__init__(config_file or Path("/nonexistent/sqltester-test.yaml"))
        self._test_overrides: Dict[str, Any] = dict(test_overrides or {})
        self.config_sources.insert(0, TestConfigSource(self._test_overrides))

    def set_test_config(self, key: str, value: Any) -> None:
        """设置单个覆盖值"""
        self._test_overrides[key] = value

    def clear_test_overrides(self) -> None:
        self._test_overrides.clear()
