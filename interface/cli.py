# interface/cli.py

from typing import Dict, Any, List, Sequence

# --- 모든 필요한 모듈과 클래스를 import ---
import core.constants as const
from core.material.exposure import (
    EXPOSURE_CLASSES, ExposureSelection, Fabrication, Specimen, get_exposure_class, lookup_grade,
)
from core.material.material import MaterialState, STEEL_GRADES, resolve_materials
from core.section.rectangular import Geometry
from core.engine import DesignEngine, DesignResult
from core.trace import CalculationStep
from core.exceptions import RCDException

from services.bar_selector import BarSelector, BarOption

# --- [1. 기본 사용자 입력(Prompt) 함수] ---

def _prompt_choice(message: str, choices: Dict[str, Any]) -> Any:
    """[내부용] 허용된 키 중 하나를 입력받을 때까지 반복합니다."""
    while True:
        key = input(message).strip().upper()
        if key in choices:
            return choices[key]
        print(f"잘못된 입력입니다. {', '.join(choices)} 중에서 선택해주세요.")

def prompt_for_exposure() -> ExposureSelection:
    """사용자로부터 노출등급, 제작방식, 공시체 종류를 입력받습니다."""
    print("\n--- [Step 1] 노출등급 선택 ---")
    for cls in EXPOSURE_CLASSES:
        print(f"  {cls.code:<4} {cls.description}")
        print(f"       예: {cls.examples}")
    raw = input("노출등급 코드 (쉼표로 구분, 예: XC1, XD2): ")
    codes = tuple(code for code in (c.strip() for c in raw.split(",")) if code)

    fabrication = _prompt_choice("제작방식 [1: 현장타설, 2: 프리캐스트]: ",
                                 {"1": Fabrication.CAST_IN_PLACE, "2": Fabrication.PRECAST})
    specimen = _prompt_choice("공시체 [1: 원주형, 2: 입방체]: ",
                              {"1": Specimen.CYLINDRICAL, "2": Specimen.CUBIC})
    return ExposureSelection(classes=codes, fabrication=fabrication, specimen=specimen)

def prompt_for_steel_grade() -> str:
    print("\n--- [Step 2] 철근 강종 선택 ---")
    return _prompt_choice(f"철근 강종 ({', '.join(STEEL_GRADES)}): ", {g: g for g in STEEL_GRADES})

def prompt_for_geometry(default_ratio: float) -> Geometry:
    """사용자로부터 단면 정보와 휨모멘트를 입력받습니다."""
    print("\n--- [Step 3] 단면 정보 입력 (m, kN.m) ---")
    width = float(input("단면의 폭 (b, m): "))
    height = float(input("단면의 높이 (h, m): "))
    raw_ratio = input(f"유효깊이 비율 d/h {const.EFFECTIVE_DEPTH_RATIOS} [기본값 {default_ratio}]: ").strip()
    ratio = float(raw_ratio) if raw_ratio else default_ratio
    moment = float(input("극한 휨모멘트 (Med, kN.m): "))
    return Geometry(width=width, height=height, moment=moment, depth_ratio=ratio)

# --- [2. 결과 출력(Display) 함수] ---

def display_materials(materials: MaterialState):
    print("\n" + "="*50)
    print("      재료 특성")
    print("="*50)
    if not materials.is_determined:
        print("  - 노출등급이 선택되지 않아 콘크리트 강도가 결정되지 않았습니다.")
    else:
        print(f"  - 지배 노출등급     : {materials.structural_class}")
        print(f"  - 콘크리트 강도     : C{materials.fck:g} (fck = {materials.fck:g} MPa)")
        print(f"  - fcm / fcd         : {materials.fcm:.2f} / {materials.fcd:.2f} MPa")
        print(f"  - fctm / Ecm        : {materials.fctm:.2f} / {materials.ecm:.0f} MPa")
    print(f"  - 철근 강종         : {materials.steel_grade} (fyk = {materials.fyk:g}, fyd = {materials.fyd:.2f} MPa)")
    print(f"  - εy / μy / ξy      : {materials.eps_y:.5f} / {materials.mu_limit:.3f} / {materials.xi_limit:.4f}")
    print("="*50)

def display_steps(steps: Sequence[CalculationStep]):
    """계산 단계 기록을 번호와 함께 출력합니다."""
    print("\n--- 계산 과정 ---")
    for i, step in enumerate(steps, start=1):
        print(f"[{i:>2}] {step.title}")
        print(f"     {step.formula}")
        print(f"     => {step.result}")

def display_design_result(result: DesignResult, geometry: Geometry):
    """설계 결과를 가독성 높게 출력합니다."""
    print("\n" + "="*50)
    print("      ✅ 설계 결과")
    print("="*50)
    print(f"  - 단면 (b x h, d)   : {geometry.width:g} x {geometry.height:g} m, d = {geometry.effective_depth:.3f} m")
    print(f"  - 휨모멘트 (Med)    : {geometry.moment:g} kN.m")
    print(f"  - 단면 형식         : {result.branch} ({'압축철근 불필요' if result.is_scas else '압축철근 필요'})")
    print(f"  - μ / ξ             : {result.mu:.4f} / {result.xi:.4f}")
    print(f"  - x / z             : {result.x:.4f} / {result.z:.4f} m")
    print(f"  - εs / σs           : {result.eps_s:.6f} / {result.sigma_s:.2f} MPa")
    print(f"\n  [철근량 (cm^2)]        소요      최소      설계")
    print(f"  - 인장철근      {result.as_required * const.M2_TO_CM2:>10.2f}{result.as_min * const.M2_TO_CM2:>10.2f}"
          f"{result.as_th_cm2:>10.2f}")
    if not result.is_scas:
        print(f"  - 압축철근      {result.as_compressed * const.M2_TO_CM2:>10.2f}{'-':>10}"
              f"{result.as_compressed_th_cm2:>10.2f}")
    if result.is_min_rebar_controlled:
        print("  * 최소철근량이 지배합니다.")
    print("="*50)

def display_bar_options(title: str, options: List[BarOption]):
    print(f"\n--- {title} 배근 제안 ---")
    if not options:
        print("  1단으로 배근 가능한 안이 없습니다. 단면 또는 배근 단수를 검토하세요.")
    for i, opt in enumerate(options, start=1):
        print(f"  [{i}] {opt.label:<7} As,prov = {opt.as_provided_cm2:.2f} cm^2 "
              f"(효율 {opt.efficiency:.3f}, 순간격 {opt.clear_spacing * 1000:.0f} mm)")

def display_error(error: Exception):
    print("\n" + "-"*40)
    print("      ❌ 오류 발생 (Error)")
    print(f"  오류 유형: {type(error).__name__}")
    print(f"  상세 내용: {error}")
    print("-"*40)

# --- [3. 메인 워크플로우(Workflow) 함수] ---

def run_design_workflow(bar_diameters: Sequence[int], default_ratio: float, show_steps: bool = True):
    print("\n>>> 단면 설계(Design Mode)를 시작합니다.")
    try:
        selection = prompt_for_exposure()
        grade = prompt_for_steel_grade()
        materials = resolve_materials(selection, grade)
        display_materials(materials)

        geometry = prompt_for_geometry(default_ratio)

        engine = DesignEngine()
        result = engine.run_design(geometry, materials)
        if show_steps:
            display_steps(result.steps)
        display_design_result(result, geometry)

        selector = BarSelector(available_diameters=bar_diameters)
        display_bar_options("인장철근", selector.select_options(result.as_th, geometry.width))
        if not result.is_scas:
            display_bar_options("압축철근", selector.select_options(result.as_compressed_th, geometry.width))

    except (RCDException, ValueError) as e:
        display_error(e)

def run_exposure_workflow():
    """선택한 노출등급의 요구 강도와 지배 등급을 조회합니다."""
    print("\n>>> 노출등급 조회(Exposure Lookup)를 시작합니다.")
    try:
        selection = prompt_for_exposure()
        print(f"\n  {'등급':<6}{'요구 fck (MPa)':>16}  설명")
        for code in selection.classes:
            cls = get_exposure_class(code)
            fck = lookup_grade(code, selection.fabrication, selection.specimen)
            print(f"  {cls.code:<6}{fck:>16g}  {cls.description}")
        materials = resolve_materials(selection, STEEL_GRADES[-1])
        display_materials(materials)
    except (RCDException, ValueError) as e:
        display_error(e)
