"""sspmod 日志配置

CLI 入口调用 setup_logging()；库代码只使用 logging.getLogger(__name__)。
进度提示走 ProgressIO，诊断信息走 logging，两者互不影响。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于 CI 流水线消费

    若日志调用通过 extra={"package": ...} 携带包名，则一并输出。
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        package = getattr(record, "package", None)
        if package:
            log_entry["package"] = package
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """配置根日志器（输出到 stderr）

    参数:
        level: 日志级别字符串，无法识别时回退到 WARNING
        json_output: 为 True 时输出 JSON 行

    重复调用会先移除已有 handler，不会产生重复输出。
    """
    reset_logging()

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"),
        )
    root.addHandler(handler)


def reset_logging() -> None:
    """移除根日志器上的全部 handler（测试中也会用到）"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
