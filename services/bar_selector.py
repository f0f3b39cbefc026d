# services/bar_selector.py

"""
이 모듈은 설계 철근량(As,th 또는 A's,th)을 만족하는 1단 배근안
(철근 개수 x 직경)을 찾아 제안하는 BarSelector 서비스를 제공합니다.
철근 순간격은 EN 1992-1-1 8.2(2) 의 max(Ø, 20 mm) 를 따릅니다.
모든 단위는 m, m^2 입니다.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence

import core.constants as const

# EN 10080 철근 공칭직경 (mm)
BAR_DIAMETERS_MM = (8, 10, 12, 14, 16, 20, 25, 32)
MIN_CLEAR_SPACING = 0.020
DEFAULT_SIDE_COVER = 0.035      # 측면 피복 + 스터럽
MIN_BARS_PER_LAYER = 2

def bar_area(diameter_mm: float) -> float:
    """철근 1개의 공칭 단면적 (m^2)"""
    return math.pi * (diameter_mm / 1000.0) ** 2 / 4

@dataclass(frozen=True)
class BarOption:
    """한 가지 배근안 (n x Ø)."""
    count: int
    diameter: int
    as_provided: float
    clear_spacing: float
    efficiency: float

    @property
    def as_provided_cm2(self) -> float:
        return self.as_provided * const.M2_TO_CM2

    @property
    def label(self) -> str:
        return f"{self.count}Ø{self.diameter}"

class BarSelector:
    """설계 철근량과 단면 폭으로부터 시공 가능한 1단 배근안을 제안"""
    def __init__(self,
                 available_diameters: Sequence[int] = BAR_DIAMETERS_MM,
                 side_cover: float = DEFAULT_SIDE_COVER):
        """
        Args:
            available_diameters: 고려할 철근 직경 목록 (mm).
            side_cover: 단면 측면에서 주철근 표면까지의 거리 (m).
        """
        self.available_diameters = sorted(available_diameters)
        self.side_cover = side_cover

    def select_options(self, as_required: float, width: float, top_n: int = 3) -> List[BarOption]:
        """
        가장 경제적인 상위 N개의 배근안을 찾습니다. 직경마다 필요한 최소 개수를
        역산한 뒤, 1단에 들어가지 않는 안은 제외합니다.
        """
        if as_required <= 0:
            return []

        clear_width = width - 2 * self.side_cover
        options = []
        for dia in self.available_diameters:
            area = bar_area(dia)
            count = max(MIN_BARS_PER_LAYER, math.ceil(as_required / area - 1e-9))
            spacing = self._clear_spacing(count, dia, clear_width)
            if spacing < max(dia / 1000.0, MIN_CLEAR_SPACING):
                continue
            as_provided = count * area
            options.append(BarOption(
                count=count,
                diameter=dia,
                as_provided=as_provided,
                clear_spacing=spacing,
                efficiency=as_provided / as_required,
            ))

        # 효율(제공/소요)이 1 에 가까울수록, 같으면 개수가 적을수록 우선
        options.sort(key=lambda opt: (opt.efficiency, opt.count))
        return options[:top_n]

    @staticmethod
    def _clear_spacing(count: int, diameter_mm: int, clear_width: float) -> float:
        """[내부용] 철근 사이 순간격 (m)"""
        return (clear_width - count * diameter_mm / 1000.0) / (count - 1)
