"""
Upgrade Toolkit - 合约升级存储兼容性检查

模块:
- storage_layout: 类型标识符编解码、存储布局提取
- alignment: 通用序列对齐(编辑距离)
- upgrade_check: 新旧存储布局比对
- config: TOML 配置加载

版本: 1.0.0
"""

from .errors import (
    UpgradeToolkitError,
    TypeIdentifierError,
    MalformedDeclarationError,
    StorageLayoutError,
    ContractNotFoundError,
    ConfigError,
)
from .storage_layout import (
    StorageItem,
    TypeItem,
    StorageLayout,
    StorageLayoutExtractor,
    extract_storage_layout,
    find_contract_definition,
)
from .alignment import EditAction, CostModel, Operation, levenshtein
from .upgrade_check import (
    StorageUpgradeChecker,
    get_storage_upgrade_errors,
    is_storage_upgrade_safe,
)
from .config import StorageCheckConfig, load_config

__version__ = "1.0.0"

__all__ = [
    "UpgradeToolkitError",
    "TypeIdentifierError",
    "MalformedDeclarationError",
    "StorageLayoutError",
    "ContractNotFoundError",
    "ConfigError",
    "StorageItem",
    "TypeItem",
    "StorageLayout",
    "StorageLayoutExtractor",
    "extract_storage_layout",
    "find_contract_definition",
    "EditAction",
    "CostModel",
    "Operation",
    "levenshtein",
    "StorageUpgradeChecker",
    "get_storage_upgrade_errors",
    "is_storage_upgrade_safe",
    "StorageCheckConfig",
    "load_config",
]
