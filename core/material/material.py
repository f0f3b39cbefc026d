# core/material/material.py

"""
이 모듈은 콘크리트와 철근 재료의 물리적, 기계적 특성을 정의하는
데이터 클래스들을 제공합니다.

각 클래스는 불변(immutable) 객체로 설계되어 데이터의 일관성과 안정성을 보장합니다.
파생 특성은 모두 core.formulas 의 EN 1992-1-1 공식으로 계산됩니다.
모든 단위는 MPa 기준입니다.
"""

from dataclasses import dataclass, replace
from typing import Optional

from loguru import logger

import core.formulas as f
from core.exceptions import MaterialError, RCDException
from core.material.exposure import ExposureSelection, resolve_structural_class

# ==============================================================================
# Module Root Level Constants
# ==============================================================================
# grade: (fyk, εy, μlim)
_STEEL_SPECS = {
    "S400": (400.0, 1.74e-3, 0.392),
    "S500": (500.0, 2.17e-3, 0.372),
}
# 경사 상단 분기(변형경화)를 사용하는 강종
_HARDENING_GRADES = {"S500"}

STEEL_GRADES = tuple(_STEEL_SPECS.keys())

# ==============================================================================
# Material Classes
# ==============================================================================
@dataclass(frozen=True)
class Steel:
    grade: str

    def __post_init__(self):
        if self.grade not in _STEEL_SPECS:
            raise MaterialError(f"Unknown rebar grade: '{self.grade}'. Supported: {', '.join(STEEL_GRADES)}.")

    @property
    def fyk(self) -> float:
        """특성항복강도 (MPa)"""
        return _STEEL_SPECS[self.grade][0]

    @property
    def fyd(self) -> float:
        """설계항복강도 fyd = fyk / 1.15 (MPa)"""
        return f.design_yield_strength(self.fyk)

    @property
    def yield_strain(self) -> float:
        """설계항복변형률 (εy = fyd / Es, 표값)"""
        return _STEEL_SPECS[self.grade][1]

    @property
    def mu_limit(self) -> float:
        """압축철근 없이 설계 가능한 한계 환산모멘트 (μy)"""
        return _STEEL_SPECS[self.grade][2]

    @property
    def xi_limit(self) -> float:
        """한계 상대압축깊이 (ξy = εcu / (εcu + εy))"""
        return f.limiting_strain_ratio(self.yield_strain)

    @property
    def has_hardening(self) -> bool:
        return self.grade in _HARDENING_GRADES

    def design_stress(self, eps_s: float) -> float:
        """주어진 변형률에서 철근의 설계응력 (MPa). 강종에 따라 경사/수평 상단 분기를 사용합니다."""
        if self.has_hardening:
            return f.steel_stress_class_b(self.fyd, eps_s, self.yield_strain)
        return f.plastic_steel_stress(self.fyd)


@dataclass(frozen=True)
class Concrete:
    """콘크리트 재료의 고유한 기계적 특성을 정의하는 불변 객체."""
    fck: float

    def __post_init__(self):
        if not self.fck > 0:
            raise MaterialError("fck must be a positive number.")

    @property
    def fcm(self) -> float:
        """평균압축강도 (MPa). EN 1992-1-1 표 3.1"""
        return f.mean_compressive_strength(self.fck)

    @property
    def fcd(self) -> float:
        """설계압축강도 (MPa). αcc = 1.0"""
        return f.design_compressive_strength(self.fck)

    @property
    def fctm(self) -> float:
        """평균인장강도 (MPa)."""
        return f.mean_tensile_strength(self.fck)

    @property
    def ecm(self) -> float:
        """할선탄성계수 (MPa)."""
        return f.elastic_modulus(self.fcm)


@dataclass(frozen=True)
class MaterialState:
    """
    설계 엔진에 전달되는 재료 상태의 스냅샷.

    fck = 0 은 '미결정(undetermined)' 상태를 의미하며, 이때 콘크리트의
    파생 특성(fcm, fcd, fctm, ecm)은 모두 0 입니다.
    """
    steel: Steel
    fck: float = 0.0
    structural_class: str = ""
    fcm: float = 0.0
    fcd: float = 0.0
    fctm: float = 0.0
    ecm: float = 0.0

    @property
    def is_determined(self) -> bool:
        return self.fck > 0

    @property
    def steel_grade(self) -> str:
        return self.steel.grade

    @property
    def fyk(self) -> float:
        return self.steel.fyk

    @property
    def fyd(self) -> float:
        return self.steel.fyd

    @property
    def eps_y(self) -> float:
        return self.steel.yield_strain

    @property
    def mu_limit(self) -> float:
        return self.steel.mu_limit

    @property
    def xi_limit(self) -> float:
        return self.steel.xi_limit

    def refreshed(self) -> "MaterialState":
        """현재 fck 로부터 콘크리트 파생 특성을 다시 계산한 상태를 반환합니다. (멱등)"""
        return derive_materials(self.fck, self.steel.grade, self.structural_class)


def derive_materials(fck: float, grade: str = "S500", structural_class: str = "") -> MaterialState:
    """
    fck 와 강종으로부터 MaterialState 를 생성합니다.

    fck <= 0 이면 콘크리트 특성을 0 으로 초기화합니다. 콘크리트 특성 계산 중
    발생한 오류는 여기서 잡아 로그로 남기고 0 으로 초기화된 값으로 대체합니다.
    강종 오류(MaterialError)는 그대로 전파됩니다.
    """
    steel = Steel(grade=grade)
    empty = MaterialState(steel=steel, fck=fck, structural_class=structural_class)
    if not fck > 0:
        return replace(empty, fck=0.0)

    try:
        concrete = Concrete(fck=fck)
        return replace(empty, fcm=concrete.fcm, fcd=concrete.fcd, fctm=concrete.fctm, ecm=concrete.ecm)
    except (RCDException, ArithmeticError, ValueError, TypeError) as e:
        logger.error("Error calculating material properties for fck={}: {}", fck, e)
        return empty


def resolve_materials(selection: ExposureSelection, grade: str = "S500") -> MaterialState:
    """노출등급 선택으로부터 지배 콘크리트 강도를 결정하고 재료 특성을 계산합니다."""
    structural_class, fck = resolve_structural_class(selection)
    if not structural_class:
        logger.debug("No governing exposure class for {}; materials are undetermined", selection.classes)
    else:
        logger.debug("Governing exposure class {} -> fck={} MPa ({}, {})",
                     structural_class, fck, selection.fabrication.value, selection.specimen.value)
    return derive_materials(float(fck), grade, structural_class)


def material_state_for(fck: float, grade: str = "S500", structural_class: Optional[str] = None) -> MaterialState:
    """노출등급 조회 없이 fck 를 직접 지정하여 재료 상태를 만듭니다. (배치 실행용)"""
    return derive_materials(fck, grade, structural_class if structural_class is not None else f"C{fck:g}")
