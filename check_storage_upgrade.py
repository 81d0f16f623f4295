#!/usr/bin/env python3
"""
存储升级兼容性检查脚本

比较合约新旧两个版本的存储布局,报告会破坏已有存储数据的变更。

输入文件可以是:
- solc standard-json 编译输出 (需指定 --contract)
- 之前用 --save-layout 保存的存储布局 JSON

用法示例:
    python check_storage_upgrade.py \\
        --original build/v1_output.json \\
        --updated build/v2_output.json \\
        --contract Vault

    # 保存新版本布局,下次升级时作为 --original 使用
    python check_storage_upgrade.py \\
        --original layouts/Vault_v1.json \\
        --updated build/v2_output.json \\
        --contract Vault \\
        --save-layout layouts/Vault_v2.json

退出码:
    0  升级安全
    1  发现不兼容变更
    2  输入错误
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# 添加src/test到路径
sys.path.insert(0, str(Path(__file__).parent / "src" / "test"))

from upgrade_toolkit import (
    EditAction,
    Operation,
    StorageLayout,
    StorageUpgradeChecker,
    UpgradeToolkitError,
    extract_storage_layout,
    find_contract_definition,
    load_config,
)

# ============================================================================
# 配置
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
logger = logging.getLogger(__name__)

EXIT_SAFE = 0
EXIT_INCOMPATIBLE = 1
EXIT_INPUT_ERROR = 2

ACTION_DESCRIPTIONS = {
    EditAction.EQUAL: "一致",
    EditAction.DELETE: "删除变量",
    EditAction.RENAME: "重命名",
    EditAction.TYPECHANGE: "类型变更",
    EditAction.REPLACE: "替换变量",
}

# ============================================================================
# 布局加载
# ============================================================================


def load_layout(path: Path, contract_name: Optional[str]) -> StorageLayout:
    """
    从文件加载存储布局

    Args:
        path: 编译输出或布局 JSON 文件
        contract_name: 合约名(编译输出时必填)

    Returns:
        StorageLayout
    """
    if not path.exists():
        raise FileNotFoundError(f"输入文件不存在: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise UpgradeToolkitError(f"无法识别的输入格式: {path}")

    if 'storage' in data and 'types' in data:
        logger.info(f"从布局文件加载: {path}")
        return StorageLayout.from_dict(data)

    if not contract_name:
        raise UpgradeToolkitError(f"{path} 是编译输出,需要通过 --contract 指定合约名")

    logger.info(f"从编译输出提取: {path} ({contract_name})")
    contract_def = find_contract_definition(data, contract_name)
    return extract_storage_layout(contract_def)


# ============================================================================
# 报告
# ============================================================================


def describe_operation(
    op: Operation,
    original: StorageLayout,
    updated: StorageLayout
) -> str:
    """生成单个操作的可读描述"""
    parts = [f"[{ACTION_DESCRIPTIONS.get(op.action, op.action.value)}]"]

    if op.original is not None:
        o = op.original
        parts.append(f"{o.contract}.{o.label} ({original.type_label(o)})")
    if op.original is not None and op.updated is not None:
        parts.append("->")
    if op.updated is not None:
        u = op.updated
        parts.append(f"{u.contract}.{u.label} ({updated.type_label(u)})")

    return " ".join(parts)


def build_report(
    errors: List[Operation],
    original: StorageLayout,
    updated: StorageLayout
) -> Dict:
    """生成 JSON 报告"""
    incompatible = [op for op in errors if op.action is not EditAction.EQUAL]
    return {
        'safe': not incompatible,
        'incompatible_count': len(incompatible),
        'operations': [
            dict(op.to_dict(), description=describe_operation(op, original, updated))
            for op in errors
        ],
    }


def print_report(report: Dict):
    print("\n" + "=" * 80)
    print("存储布局升级检查")
    print("=" * 80)

    for item in report['operations']:
        print(f"  {item['description']}")

    if report['safe']:
        print("\n✓ 升级安全: 未发现存储不兼容变更")
    else:
        print(f"\n✗ 发现 {report['incompatible_count']} 处存储不兼容变更")


# ============================================================================
# 命令行接口
# ============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='检查合约升级是否破坏存储布局',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  python check_storage_upgrade.py --original v1.json --updated v2.json --contract Vault

检测的变更类型:
  • delete      原有变量被删除
  • rename      类型相同,变量名改变
  • typechange  变量名相同,类型改变
  • replace     变量名和类型都改变
  末尾追加新变量是安全的,不会报告。
        """
    )

    parser.add_argument(
        '--original',
        type=Path,
        required=True,
        help='旧版本编译输出或布局 JSON'
    )

    parser.add_argument(
        '--updated',
        type=Path,
        required=True,
        help='新版本编译输出或布局 JSON'
    )

    parser.add_argument(
        '--contract',
        help='合约名'
    )

    parser.add_argument(
        '--updated-contract',
        help='新版本合约名(默认与 --contract 相同)'
    )

    parser.add_argument(
        '--config',
        type=Path,
        help='配置文件(默认读取当前目录下的 upgrade_check.toml)'
    )

    parser.add_argument(
        '--include-equal',
        action='store_true',
        help='报告中包含未变化的变量'
    )

    parser.add_argument(
        '--save-layout',
        type=Path,
        help='保存新版本存储布局到指定文件'
    )

    parser.add_argument(
        '--json-output',
        type=Path,
        help='JSON 报告输出路径'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='启用调试日志'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        original = load_layout(args.original, args.contract)
        updated = load_layout(args.updated, args.updated_contract or args.contract)
    except (UpgradeToolkitError, FileNotFoundError, json.JSONDecodeError) as e:
        logger.error(f"加载输入失败: {e}")
        return EXIT_INPUT_ERROR

    checker = StorageUpgradeChecker(
        cost_model=config.cost_model,
        include_equal=args.include_equal or config.include_equal
    )
    errors = checker.get_storage_upgrade_errors(original, updated)
    report = build_report(errors, original, updated)

    print_report(report)

    if args.json_output:
        args.json_output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.json_output, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
        logger.info(f"JSON 报告已保存: {args.json_output}")

    if args.save_layout:
        args.save_layout.parent.mkdir(parents=True, exist_ok=True)
        with open(args.save_layout, 'w', encoding='utf-8') as f:
            json.dump(updated.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"存储布局已保存: {args.save_layout}")

    return EXIT_SAFE if report['safe'] else EXIT_INCOMPATIBLE


if __name__ == '__main__':
    sys.exit(main())
