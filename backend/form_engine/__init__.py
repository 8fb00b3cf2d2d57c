"""
开放日表单引擎 - 核心模块

模块结构：
- config/       运行期配置与字段预设
- models/       数据模型定义（字段/表单/提交/校验问题）
- layout/       成行算法与拼接规则
- visibility/   显示条件求值与配置检查
- submission/   提交投影、格式化、校验与导出
- builder/      表单编辑（字段工厂/保存校验/草稿）
- pipeline/     现场填写、提交编辑与存储
- cli           命令行工具
"""

__version__ = "0.1.0"
