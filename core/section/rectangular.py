# core/section/rectangular.py

"""
이 모듈은 사각형 보 단면(Geometry)의 기하학적 특성과 작용 모멘트를 정의합니다.
이 클래스는 불변(immutable) 객체로, 생성 시 단면 치수에 대한 유효성을 검사합니다.

유효깊이 d 는 독립 상태로 저장하지 않고 높이 h 와 비율로부터 읽을 때 계산합니다.
모든 길이 단위는 m, 모멘트 단위는 kN·m 입니다.
"""

import math
from dataclasses import dataclass, replace

import core.constants as const
from core.exceptions import SectionError

@dataclass(frozen=True)
class Geometry:
    """
    Attributes:
        width (float): 단면의 폭 (b, m).
        height (float): 단면의 전체 높이 (h, m).
        depth_ratio (float): 유효깊이 비율 (d = ratio·h), 0.85 또는 0.9.
        moment (float): 극한 휨모멘트 (Med, kN·m).
    """
    width: float
    height: float
    moment: float
    depth_ratio: float = const.DEFAULT_EFFECTIVE_DEPTH_RATIO

    def __post_init__(self):
        if not all(math.isfinite(val) for val in [self.width, self.height, self.moment]):
            raise SectionError("Width, height and moment must be finite numbers.")
        if self.width <= 0 or self.height <= 0:
            raise SectionError("Width (b) and height (h) must be positive.")
        if not any(math.isclose(self.depth_ratio, r) for r in const.EFFECTIVE_DEPTH_RATIOS):
            allowed = ", ".join(str(r) for r in const.EFFECTIVE_DEPTH_RATIOS)
            raise SectionError(f"Effective depth ratio must be one of {allowed} (got {self.depth_ratio}).")

    @property
    def effective_depth(self) -> float:
        """인장철근의 유효깊이 (d = ratio·h)"""
        return self.height * self.depth_ratio

    @property
    def compression_steel_depth(self) -> float:
        """압축연단에서 압축철근 도심까지의 거리 (d' = 0.1·h)"""
        return self.height * const.COMPRESSION_STEEL_COVER_RATIO

    def with_changes(self, **changes) -> "Geometry":
        """일부 입력값만 바꾼 새 Geometry 를 반환합니다. d 는 새 h 와 비율로 다시 유도됩니다."""
        return replace(self, **changes)
