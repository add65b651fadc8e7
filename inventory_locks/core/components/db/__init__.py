"""
文件说明: 数据库组件包
- client.DBClient: 连接与执行
- schema: 表结构与 itemtype -> 表名映射
"""
# 保持为空，遵循显式导入原则
