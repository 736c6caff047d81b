"""화면 상태 모델 (로딩/에러/빈 목록/로드 완료)"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .backend import BalanceGameListItem


class LoadStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    LOADED = "loaded"


@dataclass
class BalanceGameListState:
    """밸런스 게임 목록 화면 상태"""
    status: LoadStatus = LoadStatus.LOADING
    items: List[BalanceGameListItem] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def loaded(cls, items: List[BalanceGameListItem]) -> "BalanceGameListState":
        if not items:
            return cls(status=LoadStatus.EMPTY)
        return cls(status=LoadStatus.LOADED, items=list(items))

    @classmethod
    def failed(cls, message: str) -> "BalanceGameListState":
        return cls(status=LoadStatus.ERROR, error=message)
