# core/material/exposure.py

"""
이 모듈은 EN 206 / EN 1992-1-1 노출등급(exposure class)과, 각 등급에 대해
요구되는 최소 콘크리트 강도(fck)를 정의하는 고정 조회표를 제공합니다.

조회표는 노출등급 -> 제작방식(현장타설/프리캐스트) -> 공시체(원주형/입방체)
의 2x2 표로 구성되며, 여러 노출등급이 선택되면 그중 최대 강도가 지배합니다.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from core.exceptions import MaterialError


class Fabrication(str, Enum):
    CAST_IN_PLACE = "cast_in_place"
    PRECAST = "precast"


class Specimen(str, Enum):
    CYLINDRICAL = "cylindrical"
    CUBIC = "cubic"


@dataclass(frozen=True)
class ExposureClass:
    """노출등급 하나의 정의."""
    code: str
    description: str
    examples: str = ""


# ==============================================================================
# Module Root Level Constants
# ==============================================================================
EXPOSURE_CLASSES: Tuple[ExposureClass, ...] = (
    ExposureClass("X0", "No risk of corrosion or attack; very dry for reinforced concrete",
                  "Concrete inside buildings with very low air humidity"),
    ExposureClass("XC1", "Carbonation: dry or permanently wet",
                  "Concrete inside buildings with low air humidity; concrete permanently submerged in water"),
    ExposureClass("XC2", "Carbonation: wet, rarely dry",
                  "Concrete surfaces subject to long-term water contact; many foundations"),
    ExposureClass("XC3", "Carbonation: moderate humidity",
                  "Concrete inside buildings with moderate or high air humidity; external concrete sheltered from rain"),
    ExposureClass("XC4", "Carbonation: cyclic wet and dry",
                  "Concrete surfaces subject to water contact, not within exposure class XC2"),
    ExposureClass("XD1", "Chlorides: moderate humidity",
                  "Concrete surfaces exposed to airborne chlorides"),
    ExposureClass("XD2", "Chlorides: wet, rarely dry",
                  "Swimming pools; concrete exposed to industrial waters containing chlorides"),
    ExposureClass("XD3", "Chlorides: cyclic wet and dry",
                  "Parts of bridges exposed to spray containing chlorides; pavements; car park slabs"),
    ExposureClass("XS1", "Sea water: exposed to airborne salt but not in direct contact with sea water",
                  "Structures near to or on the coast"),
    ExposureClass("XS2", "Sea water: permanently submerged",
                  "Parts of marine structures"),
    ExposureClass("XS3", "Sea water: tidal, splash and spray zones",
                  "Parts of marine structures"),
    ExposureClass("XF1", "Freeze/thaw: moderate water saturation, without de-icing agent",
                  "Vertical concrete surfaces exposed to rain and freezing"),
    ExposureClass("XF2", "Freeze/thaw: moderate water saturation, with de-icing agent",
                  "Vertical concrete surfaces of road structures exposed to freezing and airborne de-icing agents"),
    ExposureClass("XF3", "Freeze/thaw: high water saturation, without de-icing agents",
                  "Horizontal concrete surfaces exposed to rain and freezing"),
    ExposureClass("XF4", "Freeze/thaw: high water saturation, with de-icing agents or sea water",
                  "Road and bridge decks exposed to de-icing agents; splash zones of marine structures exposed to freezing"),
    ExposureClass("XA1", "Chemical attack: slightly aggressive environment (EN 206-1, Table 2)",
                  "Natural soils and ground water"),
    ExposureClass("XA2", "Chemical attack: moderately aggressive environment (EN 206-1, Table 2)",
                  "Natural soils and ground water"),
    ExposureClass("XA3", "Chemical attack: highly aggressive environment (EN 206-1, Table 2)",
                  "Natural soils and ground water"),
)

# (현장타설 원주형, 현장타설 입방체, 프리캐스트 원주형, 프리캐스트 입방체)
_GRADE_ROWS = {
    "X0":  (0, 0, 20, 25),
    "XC1": (20, 25, 25, 30),
    "XC2": (25, 30, 30, 37),
    "XC3": (30, 37, 35, 45),
    "XC4": (30, 37, 35, 45),
    "XD1": (30, 37, 35, 45),
    "XD2": (30, 37, 40, 50),
    "XD3": (35, 45, 35, 45),
    "XS1": (30, 37, 40, 50),
    "XS2": (35, 45, 40, 50),
    "XS3": (35, 45, 35, 45),
    "XF1": (30, 37, 35, 45),
    "XF2": (30, 37, 35, 45),
    "XF3": (30, 37, 35, 45),
    "XF4": (30, 37, 35, 45),
    "XA1": (30, 37, 40, 50),
    "XA2": (35, 45, 40, 50),
    "XA3": (40, 50, 40, 50),
}

GradeTable = Dict[Fabrication, Dict[Specimen, float]]

STRUCTURAL_CLASSES: Dict[str, GradeTable] = {
    code: {
        Fabrication.CAST_IN_PLACE: {Specimen.CYLINDRICAL: row[0], Specimen.CUBIC: row[1]},
        Fabrication.PRECAST: {Specimen.CYLINDRICAL: row[2], Specimen.CUBIC: row[3]},
    }
    for code, row in _GRADE_ROWS.items()
}

EXPOSURE_CODES = tuple(cls.code for cls in EXPOSURE_CLASSES)


# ==============================================================================
# 선택 상태 및 조회
# ==============================================================================
@dataclass(frozen=True)
class ExposureSelection:
    """
    사용자가 선택한 노출등급 집합과 제작방식, 공시체 종류.

    Attributes:
        classes (Tuple[str, ...]): 선택 순서를 유지하는 노출등급 코드. 비어 있을 수 있습니다.
        fabrication (Fabrication): 현장타설 / 프리캐스트.
        specimen (Specimen): 원주형 / 입방체 공시체.
    """
    classes: Tuple[str, ...] = ()
    fabrication: Fabrication = Fabrication.CAST_IN_PLACE
    specimen: Specimen = Specimen.CYLINDRICAL

    def __post_init__(self):
        unique = []
        for code in self.classes:
            code = code.strip().upper()
            if code not in STRUCTURAL_CLASSES:
                raise MaterialError(f"Unknown exposure class: '{code}'.")
            if code not in unique:
                unique.append(code)
        object.__setattr__(self, "classes", tuple(unique))
        object.__setattr__(self, "fabrication", Fabrication(self.fabrication))
        object.__setattr__(self, "specimen", Specimen(self.specimen))

    def toggle(self, code: str) -> "ExposureSelection":
        """노출등급 하나를 켜거나 끈 새 선택 상태를 반환합니다."""
        code = code.strip().upper()
        if code in self.classes:
            classes = tuple(c for c in self.classes if c != code)
        else:
            classes = self.classes + (code,)
        return ExposureSelection(classes, self.fabrication, self.specimen)


def get_exposure_class(code: str) -> ExposureClass:
    for cls in EXPOSURE_CLASSES:
        if cls.code == code.strip().upper():
            return cls
    raise MaterialError(f"Unknown exposure class: '{code}'.")


def lookup_grade(code: str, fabrication: Fabrication, specimen: Specimen) -> float:
    """단일 노출등급에 대한 요구 콘크리트 강도 (MPa)"""
    try:
        return STRUCTURAL_CLASSES[code][Fabrication(fabrication)][Specimen(specimen)]
    except KeyError:
        raise MaterialError(f"Unknown exposure class: '{code}'.") from None


def resolve_structural_class(selection: ExposureSelection) -> Tuple[str, float]:
    """
    선택된 노출등급 중 최대 강도를 요구하는 등급을 찾습니다.

    동일한 최대값이 여러 개면 먼저 선택된 등급이 지배합니다.
    선택이 비었거나 최대값이 0 이면 ("", 0) 을 반환합니다. (미결정 상태, 오류 아님)
    """
    governing_class, governing_fck = "", 0
    for code in selection.classes:
        fck = lookup_grade(code, selection.fabrication, selection.specimen)
        if fck > governing_fck:
            governing_class, governing_fck = code, fck
    return governing_class, governing_fck
