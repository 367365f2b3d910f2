"""共通型定義"""

from enum import IntEnum

DEFAULT_QUALITY = 85
MIN_QUALITY = 0
MAX_QUALITY = 100


class ExitCode(IntEnum):
    """CLIの終了コード"""

    SUCCESS = 0
    ERROR = 1
    INVALID_INPUT = 2
