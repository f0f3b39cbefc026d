# core/helpers.py

"""
이 모듈은 core 패키지 내부의 다른 모듈들이 공통적으로 사용하는
저수준(low-level) 도우미 함수들을 제공합니다.
"""

import math

from core.exceptions import OutOfDomainError, ZeroDivisorError

# 프로젝트 전역에서 사용할 부동소수점 비교를 위한 허용 오차
TOLERANCE = 1e-12

def is_greater_or_equal(a: float, b: float) -> bool:
    """
    부동소수점 오차를 고려하여 a >= b 인지 안전하게 비교합니다.
    a가 b보다 크거나, 두 수의 차이가 허용 오차보다 작으면 True를 반환합니다.
    """
    return (a - b) > -TOLERANCE

def is_less_or_equal(a: float, b: float) -> bool:
    """
    부동소수점 오차를 고려하여 a <= b 인지 안전하게 비교합니다.
    a가 b보다 작거나, 두 수의 차이가 허용 오차보다 작으면 True를 반환합니다.
    """
    return (a - b) < TOLERANCE

def is_equal(a: float, b: float) -> bool:
    """
    부동소수점 오차를 고려하여 a == b 인지 안전하게 비교합니다.
    두 수의 차이의 절대값이 허용 오차보다 작으면 True를 반환합니다.
    """
    return abs(a - b) < TOLERANCE

# ==============================================================================
# 공식 입력값 사전 검증 (precondition guards)
# ==============================================================================
def require_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise OutOfDomainError(name, value, "must be finite")
    return value

def require_non_negative(name: str, value: float) -> float:
    require_finite(name, value)
    if not is_greater_or_equal(value, 0.0):
        raise OutOfDomainError(name, value, "must be >= 0")
    return value

def require_non_zero(name: str, value: float) -> float:
    """분모로 사용될 값이 0(허용 오차 이내)이면 ZeroDivisorError를 발생시킵니다."""
    require_finite(name, value)
    if is_equal(value, 0.0):
        raise ZeroDivisorError(name)
    return value

def require_positive(name: str, value: float) -> float:
    require_non_zero(name, value)
    if value < 0:
        raise OutOfDomainError(name, value, "must be > 0")
    return value
