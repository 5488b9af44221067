"""核心逻辑

- locator.py: 宿主包 / 模块包定位
- synchronizer.py: 目标目录计算 + 镜像 / 删除
- hooks.py: 包管理器生命周期钩子
"""
