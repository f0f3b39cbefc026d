# core/trace.py

"""
이 모듈은 설계 계산의 단계별 유도 과정(calculation trace)을 기록하는
데이터 클래스와 표시용 서식 함수를 제공합니다.

각 단계는 제목, TeX 형식의 수식(대입된 값 포함), 서식화된 결과로 구성됩니다.
수식 문자열은 표시 정밀도로 반올림된 값을 담으므로 결과의 재계산 경로가 아닙니다.
"""

from dataclasses import dataclass
from typing import List, Tuple

import core.constants as const

@dataclass(frozen=True)
class CalculationStep:
    title: str
    formula: str
    result: str


class CalculationTrace:
    """한 번의 설계 실행 동안 단계를 순서대로 추가(append-only)하는 기록기."""

    def __init__(self):
        self._steps: List[CalculationStep] = []

    def add(self, title: str, formula: str, result: str) -> CalculationStep:
        step = CalculationStep(title=title, formula=formula, result=result)
        self._steps.append(step)
        return step

    def freeze(self) -> Tuple[CalculationStep, ...]:
        return tuple(self._steps)

# ==============================================================================
# 표시용 서식 함수
# ==============================================================================
def fmt(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}"

def fmt_g(value: float) -> str:
    """불필요한 0 없이 입력값을 표시합니다. (예: 100.0 -> '100')"""
    return f"{value:g}"

def fmt_area(value_m2: float) -> str:
    """면적을 m^2 와 cm^2 로 함께 표시합니다."""
    return f"{value_m2:.6f} m² = {value_m2 * const.M2_TO_CM2:.2f} cm²"

def tex_compare(is_less_or_equal: bool) -> str:
    return r"\leq" if is_less_or_equal else ">"
