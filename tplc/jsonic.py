from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any, *, indent: int | None = None) -> str:
    """
    JSON-дампер для ответов CLI.
    - ensure_ascii=False; без завершающего \\n (CLI решает сам).
    - indent=None даёт компактный вывод, иначе prettify с отступом.
    """
    return json.dumps(obj, ensure_ascii=False, indent=indent)


__all__ = ["dumps"]
