# core/formulas.py

"""
이 모듈은 EN 1992-1-1 단순 휨 설계에 사용되는 닫힌 형태(closed-form)의
공식들을 순수 함수로 제공합니다.

모든 함수는 상태를 갖지 않으며, 계산 전에 입력값의 정의역을 검사하여
NaN/무한대 대신 DomainError 계열의 예외를 발생시킵니다.
단위: 길이 m, 응력 MPa, 모멘트 kN·m, 면적 m^2.
"""

import math

import core.constants as const
from core.helpers import (
    is_greater_or_equal,
    is_less_or_equal,
    require_non_negative,
    require_non_zero,
    require_positive,
)
from core.exceptions import OutOfDomainError

# ==============================================================================
# 재료 특성 (EN 1992-1-1 표 3.1)
# ==============================================================================
def mean_compressive_strength(fck: float) -> float:
    """평균압축강도 fcm = fck + 8 (MPa)"""
    return fck + const.FCM_OFFSET

def design_compressive_strength(fck: float) -> float:
    """설계압축강도 fcd = fck / γc (MPa)"""
    return fck / const.GAMMA_C

def mean_tensile_strength(fck: float) -> float:
    """평균인장강도 fctm = 0.3·fck^(2/3) (MPa). 음수 밑의 분수 거듭제곱은 정의되지 않습니다."""
    require_non_negative("fck", fck)
    return const.FCTM_FACTOR * fck ** (2 / 3)

def elastic_modulus(fcm: float) -> float:
    """할선탄성계수 Ecm = 22000·(fcm/10)^0.3 (MPa)"""
    require_non_negative("fcm", fcm)
    return const.ECM_FACTOR * (fcm / 10) ** const.ECM_EXPONENT

def design_yield_strength(fyk: float) -> float:
    """철근 설계항복강도 fyd = fyk / γs (MPa)"""
    return fyk / const.GAMMA_S

def limiting_strain_ratio(eps_y: float) -> float:
    """
    철근 항복과 콘크리트 극한변형률이 동시에 도달하는 한계 상대압축깊이.
    ξy = εcu / (εcu + εy)
    """
    return const.CONCRETE_ULTIMATE_STRAIN / require_non_zero("εcu + εy", const.CONCRETE_ULTIMATE_STRAIN + eps_y)

# ==============================================================================
# 단순 휨 - 분기 판정
# ==============================================================================
def reduced_moment(med: float, b: float, d: float, fcd: float) -> float:
    """
    환산모멘트 μ = Med / (b·d²·fcd).
    Med(kN·m)는 MN·m 로 환산하여 MPa·m^3 과 단위를 맞춥니다.
    """
    require_positive("b", b)
    require_positive("d", d)
    require_positive("fcd", fcd)
    return med * const.KNM_TO_MNM / (b * d ** 2 * fcd)

def is_under_reinforced(mu: float, mu_limit: float) -> bool:
    """μ <= μlim 이면 압축철근이 필요 없는 단면(SCAS)입니다. 경계값은 SCAS 로 처리합니다."""
    return mu <= mu_limit

# ==============================================================================
# 압축철근이 없는 단면 (SCAS)
# ==============================================================================
def compression_parameter(mu: float) -> float:
    """상대압축깊이 ξ = 1.25·(1 - √(1 - 2μ)), 0 <= μ <= 0.5"""
    if not (is_greater_or_equal(mu, 0.0) and is_less_or_equal(mu, const.MAX_REDUCED_MOMENT)):
        raise OutOfDomainError("μ", mu, f"0 <= μ <= {const.MAX_REDUCED_MOMENT}")
    return const.COMPRESSION_PARAMETER_FACTOR * (1 - math.sqrt(max(0.0, 1 - 2 * mu)))

def compression_depth(d: float, xi: float) -> float:
    """압축대 깊이 x = ξ·d (m)"""
    return d * xi

def lever_arm(d: float, x: float) -> float:
    """내부 우력의 팔길이 z = d - 0.4·x (m)"""
    return d - const.LEVER_ARM_FACTOR * x

def tensile_steel_strain(d: float, x: float) -> float:
    """인장철근 변형률 εs = (d - x)/x · εcu"""
    require_non_zero("x", x)
    return (d - x) / x * const.CONCRETE_ULTIMATE_STRAIN

def compressed_steel_strain(x: float, d_prime: float) -> float:
    """압축철근 변형률 ε's = (x - d')/x · εcu"""
    require_non_zero("x", x)
    return (x - d_prime) / x * const.CONCRETE_ULTIMATE_STRAIN

def steel_stress_class_b(fyd: float, eps_s: float, eps_y: float,
                         k: float = const.HARDENING_RATIO,
                         eps_uk: float = const.STEEL_ULTIMATE_STRAIN) -> float:
    """
    경사 상단 분기(Class B)를 갖는 철근의 응력 (EN 1992-1-1 그림 3.8).
    σs = fyd·(k + (εs - εuk)(k - 1)/(εuk - εy))
    εs 는 [εy, εuk] 범위로 제한하므로 결과는 fyd ~ k·fyd 사이에 있습니다.
    """
    require_non_zero("εuk - εy", eps_uk - eps_y)
    eps = min(max(eps_s, eps_y), eps_uk)
    return fyd * (k + (eps - eps_uk) * (k - 1) / (eps_uk - eps_y))

def plastic_steel_stress(fyd: float) -> float:
    """수평 상단 분기(완전소성) 철근의 응력 σs = fyd"""
    return fyd

def required_tensile_area(med: float, sigma_s: float, z: float) -> float:
    """소요 인장철근량 As = Med / (σs·z) (m^2)"""
    require_non_zero("σs", sigma_s)
    require_non_zero("z", z)
    return med * const.KNM_TO_MNM / (sigma_s * z)

def minimum_tensile_area(b: float, d: float, fctm: float, fyk: float) -> float:
    """최소 인장철근량 As,min = 0.26·b·d·fctm/fyk (EN 1992-1-1 식 9.1N)"""
    require_non_zero("fyk", fyk)
    return const.MIN_REINFORCEMENT_FACTOR * b * d * fctm / fyk

def governing_area(as_calc: float, as_min: float) -> float:
    return max(as_calc, as_min)

# ==============================================================================
# 압축철근이 있는 단면 (SAAS)
# ==============================================================================
def moment_carried_by_tension_steel(b: float, x: float, fcd: float, z: float) -> float:
    """
    한계 상태(x = ξy·d)에서 콘크리트 압축대와 평형을 이루는 인장철근이 부담하는 모멘트.
    Mu1 = 0.8·b·x·fcd·z (kN·m)
    """
    return const.STRESS_BLOCK_DEPTH * b * x * fcd * z * const.MNM_TO_KNM

def residual_moment(med: float, mu1: float) -> float:
    """압축철근이 부담하는 잔여 모멘트 Mu2 = Med - Mu1 (kN·m)"""
    return med - mu1

def compressed_steel_area(mu2: float, sigma_s_prime: float, d: float, d_prime: float) -> float:
    """압축철근량 A's = Mu2 / (σ's·(d - d')) (m^2)"""
    require_non_zero("σ's", sigma_s_prime)
    require_non_zero("d - d'", d - d_prime)
    return mu2 * const.KNM_TO_MNM / (sigma_s_prime * (d - d_prime))

def doubly_reinforced_tensile_area(mu1: float, mu2: float, sigma_s: float, z: float,
                                   d: float, d_prime: float) -> float:
    """
    복철근 단면의 인장철근량.
    As = Mu1/(σs·z) + Mu2/(σs·(d - d')) (m^2)
    """
    balanced = required_tensile_area(mu1, sigma_s, z)
    require_non_zero("d - d'", d - d_prime)
    residual = mu2 * const.KNM_TO_MNM / (sigma_s * (d - d_prime))
    return balanced + residual
