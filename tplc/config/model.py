from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class CompilerConfig(BaseModel):
    """
    Настройки tplc из tplc.yaml.

    Все поля необязательны; отсутствующий файл равносилен пустому.
    """
    model_config = ConfigDict(extra="forbid")

    log_level: LogLevel = "WARNING"
    pretty: bool = False          # prettify JSON-вывода команд
    indent: int = Field(default=2, ge=0)


__all__ = ["LogLevel", "CompilerConfig"]
