# core/engine.py

from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

import core.constants as const
import core.formulas as f
from core.exceptions import UndeterminedMaterialError
from core.material.material import MaterialState
from core.section.rectangular import Geometry
from core.trace import CalculationStep, CalculationTrace, fmt, fmt_area, fmt_g, tex_compare

# ==============================================================================
# 결과 반환을 위한 데이터 클래스 정의
# ==============================================================================
@dataclass(frozen=True)
class DesignResult:
    """
    단순 휨 설계 결과. 한 번의 실행으로 한꺼번에 생성되며 부분 갱신되지 않습니다.
    면적 단위는 m^2, 모멘트 단위는 kN·m, 응력 단위는 MPa 입니다.
    """
    mu: float
    xi: float
    x: float
    z: float
    eps_s: float
    sigma_s: float
    as_required: float
    as_min: float
    as_th: float
    is_scas: bool
    steps: Tuple[CalculationStep, ...]
    as_compressed: Optional[float] = None
    as_compressed_th: Optional[float] = None
    eps_s_prime: Optional[float] = None
    sigma_s_prime: Optional[float] = None
    mu1: Optional[float] = None
    mu2: Optional[float] = None

    @property
    def branch(self) -> str:
        return "SCAS" if self.is_scas else "SAAS"

    @property
    def is_min_rebar_controlled(self) -> bool:
        return self.as_min > self.as_required

    @property
    def as_th_cm2(self) -> float:
        return self.as_th * const.M2_TO_CM2

    @property
    def as_compressed_th_cm2(self) -> Optional[float]:
        if self.as_compressed_th is None:
            return None
        return self.as_compressed_th * const.M2_TO_CM2

# ==============================================================================
# 설계 엔진 클래스
# ==============================================================================
class DesignEngine:
    """
    EN 1992-1-1 에 따른 사각형 단면의 단순 휨 설계를 수행하는 핵심 엔진 클래스.

    환산모멘트 μ 를 강종별 한계값 μy 와 비교하여
    압축철근이 없는 단면(SCAS) 또는 압축철근이 있는 단면(SAAS) 으로 분기하고,
    각 계산 단계를 CalculationTrace 에 기록합니다.
    엔진은 상태를 갖지 않으므로 같은 입력에 대해 항상 같은 결과를 반환합니다.
    """

    def run_design(self, geometry: Geometry, materials: MaterialState) -> DesignResult:
        if not materials.is_determined:
            raise UndeterminedMaterialError()

        # 분기 판정 전에 재료 특성을 fck 로부터 다시 계산 (멱등)
        materials = materials.refreshed()
        logger.debug("Design run: b={} h={} d={} Med={} fck={} steel={}",
                     geometry.width, geometry.height, geometry.effective_depth,
                     geometry.moment, materials.fck, materials.steel_grade)

        trace = CalculationTrace()
        b, d, med = geometry.width, geometry.effective_depth, geometry.moment
        fcd = materials.fcd

        mu = f.reduced_moment(med, b, d, fcd)
        trace.add(
            "환산모멘트 (μ) 계산",
            rf"\mu = \frac{{M_{{Ed}}}}{{b \cdot d^2 \cdot f_{{cd}}}} = "
            rf"\frac{{{fmt_g(med)}}}{{{fmt(b)} \cdot {fmt(d)}^2 \cdot {fmt(fcd)} \cdot 10^3}}",
            f"μ = {fmt(mu, 4)}",
        )

        mu_limit = materials.mu_limit
        is_scas = f.is_under_reinforced(mu, mu_limit)
        op = tex_compare(is_scas)
        trace.add(
            "단면 형식 판정 (SCAS / SAAS)",
            rf"\mu {op} \mu_y \Rightarrow {fmt(mu, 4)} {op} {fmt(mu_limit, 4)}",
            "압축철근이 없는 단면 (SCAS)" if is_scas else "압축철근이 있는 단면 (SAAS)",
        )
        logger.debug("μ={:.4f} {} μy={:.4f} -> {}", mu, "<=" if is_scas else ">", mu_limit,
                     "SCAS" if is_scas else "SAAS")

        if is_scas:
            result = self._design_singly_reinforced(geometry, materials, mu, trace)
        else:
            result = self._design_doubly_reinforced(geometry, materials, mu, trace)
        return result

    # --------------------------------------------------------------------------
    # 압축철근이 없는 단면 (SCAS)
    # --------------------------------------------------------------------------
    def _design_singly_reinforced(self, geometry: Geometry, materials: MaterialState,
                                  mu: float, trace: CalculationTrace) -> DesignResult:
        b, d, med = geometry.width, geometry.effective_depth, geometry.moment

        xi = f.compression_parameter(mu)
        trace.add(
            "상대압축깊이 (ξ) 계산",
            rf"\xi = 1.25 \cdot (1 - \sqrt{{1 - 2\mu}}) = 1.25 \cdot (1 - \sqrt{{1 - 2 \cdot {fmt(mu, 4)}}})",
            f"ξ = {fmt(xi, 4)}",
        )

        x = f.compression_depth(d, xi)
        trace.add(
            "압축대 깊이 (x) 계산",
            rf"x = \xi \cdot d = {fmt(xi, 4)} \cdot {fmt(d)}",
            f"x = {fmt(x, 4)} m",
        )

        z = f.lever_arm(d, x)
        trace.add(
            "내부 우력의 팔길이 (z) 계산",
            rf"z = d - 0.4 \cdot x = {fmt(d)} - 0.4 \cdot {fmt(x, 4)}",
            f"z = {fmt(z, 4)} m",
        )

        eps_s = f.tensile_steel_strain(d, x)
        trace.add(
            "인장철근 변형률 (εs) 계산",
            rf"\varepsilon_s = \frac{{d - x}}{{x}} \cdot \varepsilon_{{cu}} = "
            rf"\frac{{{fmt(d)} - {fmt(x, 4)}}}{{{fmt(x, 4)}}} \cdot 3.5 \cdot 10^{{-3}}",
            f"εs = {fmt(eps_s, 6)}",
        )

        sigma_s = materials.steel.design_stress(eps_s)
        trace.add(*self._steel_stress_step(materials, eps_s, sigma_s, prime=False))

        as_required = f.required_tensile_area(med, sigma_s, z)
        trace.add(
            "소요 인장철근량 (As) 계산",
            rf"A_s = \frac{{M_{{Ed}}}}{{\sigma_s \cdot z}} = "
            rf"\frac{{{fmt_g(med)}}}{{{fmt(sigma_s)} \cdot {fmt(z, 4)} \cdot 10^3}}",
            f"As = {fmt_area(as_required)}",
        )

        as_min = self._minimum_area_step(geometry, materials, trace)
        as_th = self._governing_area_step(as_required, as_min, trace, "설계 인장철근량 (As,th) 결정")

        return DesignResult(
            mu=mu, xi=xi, x=x, z=z, eps_s=eps_s, sigma_s=sigma_s,
            as_required=as_required, as_min=as_min, as_th=as_th,
            is_scas=True, steps=trace.freeze(),
        )

    # --------------------------------------------------------------------------
    # 압축철근이 있는 단면 (SAAS)
    # --------------------------------------------------------------------------
    def _design_doubly_reinforced(self, geometry: Geometry, materials: MaterialState,
                                  mu: float, trace: CalculationTrace) -> DesignResult:
        b, d, med = geometry.width, geometry.effective_depth, geometry.moment
        d_prime = geometry.compression_steel_depth
        fcd, eps_y = materials.fcd, materials.eps_y

        # 압축대 깊이를 강종의 한계값에 고정 (μ 로부터 다시 계산하지 않음)
        xi = materials.xi_limit
        trace.add(
            "한계 상대압축깊이 (ξy) 적용",
            rf"\xi = \xi_y = \frac{{\varepsilon_{{cu}}}}{{\varepsilon_{{cu}} + \varepsilon_y}} = "
            rf"\frac{{3.5 \cdot 10^{{-3}}}}{{3.5 \cdot 10^{{-3}} + {fmt(eps_y * 1e3, 2)} \cdot 10^{{-3}}}}",
            f"ξ = {fmt(xi, 4)}",
        )

        x = f.compression_depth(d, xi)
        trace.add(
            "압축대 깊이 (xy) 계산",
            rf"x_y = \xi_y \cdot d = {fmt(xi, 4)} \cdot {fmt(d)}",
            f"x = {fmt(x, 4)} m",
        )

        z = f.lever_arm(d, x)
        trace.add(
            "내부 우력의 팔길이 (zy) 계산",
            rf"z_y = d - 0.4 \cdot x_y = {fmt(d)} - 0.4 \cdot {fmt(x, 4)}",
            f"z = {fmt(z, 4)} m",
        )

        eps_s = f.tensile_steel_strain(d, x)
        trace.add(
            "인장철근 변형률 (εs) 계산",
            rf"\varepsilon_s = \frac{{d - x_y}}{{x_y}} \cdot \varepsilon_{{cu}} = "
            rf"\frac{{{fmt(d)} - {fmt(x, 4)}}}{{{fmt(x, 4)}}} \cdot 3.5 \cdot 10^{{-3}}",
            f"εs = {fmt(eps_s, 6)}",
        )

        sigma_s = materials.steel.design_stress(eps_s)
        trace.add(*self._steel_stress_step(materials, eps_s, sigma_s, prime=False))

        eps_s_prime = f.compressed_steel_strain(x, d_prime)
        trace.add(
            "압축철근 변형률 (ε's) 계산",
            rf"\varepsilon'_s = \frac{{x_y - d'}}{{x_y}} \cdot \varepsilon_{{cu}} = "
            rf"\frac{{{fmt(x, 4)} - {fmt(d_prime, 3)}}}{{{fmt(x, 4)}}} \cdot 3.5 \cdot 10^{{-3}}",
            f"ε's = {fmt(eps_s_prime, 6)}",
        )

        # d' = 0.1h, x = ξy·d 이므로 ε's > εy : 압축철근은 항상 항복
        sigma_s_prime = materials.steel.design_stress(eps_s_prime)
        trace.add(*self._steel_stress_step(materials, eps_s_prime, sigma_s_prime, prime=True))

        mu1 = f.moment_carried_by_tension_steel(b, x, fcd, z)
        trace.add(
            "한계 모멘트 (Mu1) 계산",
            rf"M_{{u1}} = 0.8 \cdot b \cdot x_y \cdot f_{{cd}} \cdot z_y = "
            rf"0.8 \cdot {fmt(b)} \cdot {fmt(x, 4)} \cdot {fmt(fcd)} \cdot {fmt(z, 4)} \cdot 10^3",
            f"Mu1 = {fmt(mu1)} kN·m",
        )

        mu2 = f.residual_moment(med, mu1)
        trace.add(
            "압축철근이 부담하는 모멘트 (Mu2) 계산",
            rf"M_{{u2}} = M_{{Ed}} - M_{{u1}} = {fmt_g(med)} - {fmt(mu1)}",
            f"Mu2 = {fmt(mu2)} kN·m",
        )

        as_compressed = f.compressed_steel_area(mu2, sigma_s_prime, d, d_prime)
        trace.add(
            "압축철근량 (A's) 계산",
            rf"A'_s = \frac{{M_{{u2}}}}{{\sigma'_s \cdot (d - d')}} = "
            rf"\frac{{{fmt(mu2)}}}{{{fmt(sigma_s_prime)} \cdot ({fmt(d, 3)} - {fmt(d_prime, 3)}) \cdot 10^3}}",
            f"A's = {fmt_area(as_compressed)}",
        )

        as_required = f.doubly_reinforced_tensile_area(mu1, mu2, sigma_s, z, d, d_prime)
        trace.add(
            "소요 인장철근량 (As) 계산",
            rf"A_s = \frac{{M_{{u1}}}}{{\sigma_s \cdot z_y}} + \frac{{M_{{u2}}}}{{\sigma_s \cdot (d - d')}} = "
            rf"\frac{{{fmt(mu1)}}}{{{fmt(sigma_s)} \cdot {fmt(z, 4)} \cdot 10^3}} + "
            rf"\frac{{{fmt(mu2)}}}{{{fmt(sigma_s)} \cdot ({fmt(d, 3)} - {fmt(d_prime, 3)}) \cdot 10^3}}",
            f"As = {fmt_area(as_required)}",
        )

        as_min = self._minimum_area_step(geometry, materials, trace)
        as_th = self._governing_area_step(as_required, as_min, trace, "설계 인장철근량 (As,th) 결정")

        # 압축철근은 최소철근량 검토 없음
        as_compressed_th = as_compressed
        trace.add(
            "설계 압축철근량 (A's,th) 결정",
            rf"A'_{{s,th}} = A'_s = {fmt(as_compressed * const.M2_TO_CM2)}",
            f"A's,th = {fmt_area(as_compressed_th)}",
        )

        return DesignResult(
            mu=mu, xi=xi, x=x, z=z, eps_s=eps_s, sigma_s=sigma_s,
            as_required=as_required, as_min=as_min, as_th=as_th,
            is_scas=False, steps=trace.freeze(),
            as_compressed=as_compressed, as_compressed_th=as_compressed_th,
            eps_s_prime=eps_s_prime, sigma_s_prime=sigma_s_prime,
            mu1=mu1, mu2=mu2,
        )

    # --------------------------------------------------------------------------
    # 공통 단계
    # --------------------------------------------------------------------------
    def _steel_stress_step(self, materials: MaterialState, eps: float, sigma: float,
                           prime: bool) -> Tuple[str, str, str]:
        """[내부용] 강종에 따른 철근 응력 단계의 (제목, 수식, 결과)를 만듭니다."""
        s, e, label = (r"\sigma'_s", r"\varepsilon'_s", "σ's") if prime else (r"\sigma_s", r"\varepsilon_s", "σs")
        name = "압축철근" if prime else "인장철근"
        grade = materials.steel_grade
        if materials.steel.has_hardening:
            formula = (
                rf"{s} = f_{{yd}} \cdot \left(k + \frac{{({e} - \varepsilon_{{uk}})(k - 1)}}"
                rf"{{\varepsilon_{{uk}} - \varepsilon_y}}\right) = "
                rf"{fmt(materials.fyd)} \cdot \left(1.08 + \frac{{({fmt(eps, 6)} - 0.05) \cdot 0.08}}"
                rf"{{0.05 - {fmt(materials.eps_y, 5)}}}\right)"
            )
        else:
            formula = rf"{s} = f_{{yd}} = {fmt(materials.fyd)}"
        return f"{name} 응력 ({label}) 계산 - {grade}", formula, f"{label} = {fmt(sigma)} MPa"

    def _minimum_area_step(self, geometry: Geometry, materials: MaterialState,
                           trace: CalculationTrace) -> float:
        b, d = geometry.width, geometry.effective_depth
        as_min = f.minimum_tensile_area(b, d, materials.fctm, materials.fyk)
        trace.add(
            "최소 인장철근량 (As,min) 계산",
            rf"A_{{s,min}} = \frac{{0.26 \cdot b \cdot d \cdot f_{{ctm}}}}{{f_{{yk}}}} = "
            rf"\frac{{0.26 \cdot {fmt(b)} \cdot {fmt(d)} \cdot {fmt(materials.fctm)}}}{{{fmt_g(materials.fyk)}}}",
            f"As,min = {fmt_area(as_min)}",
        )
        return as_min

    def _governing_area_step(self, as_required: float, as_min: float,
                             trace: CalculationTrace, title: str) -> float:
        as_th = f.governing_area(as_required, as_min)
        trace.add(
            title,
            rf"A_{{s,th}} = \max(A_s, A_{{s,min}}) = "
            rf"\max({fmt(as_required * const.M2_TO_CM2)}, {fmt(as_min * const.M2_TO_CM2)})",
            f"As,th = {fmt_area(as_th)}",
        )
        return as_th


def run_design(geometry: Geometry, materials: MaterialState) -> Tuple[DesignResult, Tuple[CalculationStep, ...]]:
    """설계를 한 번 실행하고 (결과, 단계 기록) 을 반환합니다."""
    result = DesignEngine().run_design(geometry, materials)
    return result, result.steps
