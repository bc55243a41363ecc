#!/usr/bin/env python
"""
一键运行测试脚本

用法：
    python tests/run_tests.py            # 全部测试
    python tests/run_tests.py api        # 只跑 HTTP 接口测试
    python tests/run_tests.py core -x    # 其余参数原样传给 pytest
"""
import os
import sys
import subprocess

# 测试分组 -> 目录
SUITES = {
    "core": "tests/core",
    "services": "tests/services",
    "api": "tests/crud",
}


def build_command(argv):
    """根据参数拼出 pytest 命令"""
    cmd = [sys.executable, "-m", "pytest"]
    if argv and argv[0] in SUITES:
        cmd.append(SUITES[argv[0]])
        argv = argv[1:]
    else:
        cmd.append("tests/")
    return cmd + (argv or ["-v", "--tb=short"])


def main():
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    os.chdir(project_root)

    cmd = build_command(sys.argv[1:])
    print(f"项目目录: {project_root}")
    print(f"执行命令: {' '.join(cmd)}")
    print("=" * 60)

    return subprocess.run(cmd).returncode


if __name__ == "__main__":
    sys.exit(main())
