"""进度输出实现"""

from __future__ import annotations

import click


class ConsoleIO:
    """进度写 stdout，错误写 stderr"""

    def __init__(self, quiet: bool = False) -> None:
        self.quiet = quiet

    def write(self, message: str) -> None:
        if not self.quiet:
            click.echo(message)

    def write_error(self, message: str) -> None:
        click.echo(message, err=True)


class BufferIO:
    """把输出收集在内存中，供嵌入调用和测试读取"""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.errors: list[str] = []

    def write(self, message: str) -> None:
        self.lines.append(message)

    def write_error(self, message: str) -> None:
        self.errors.append(message)

    def output(self) -> str:
        return "\n".join(self.lines)
