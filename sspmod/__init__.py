"""sspmod - SimpleSAMLphp 模块安装插件

依赖解析完成后，把 type 为 simplesamlphp-module 的包同步到
宿主应用 simplesamlphp/simplesamlphp 的 modules/ 目录下。
"""

__version__ = "2.0.0"
