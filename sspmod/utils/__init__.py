"""通用工具：日志、YAML 读取、目录同步"""
