# core/exceptions.py

"""
이 모듈은 EC2 보 설계 계산기에서 사용되는 모든 사용자 정의 예외 클래스를
중앙에서 관리합니다.

각 예외는 특정 오류 상황을 명확하게 나타내어, 체계적이고 구체적인
오류 처리를 가능하게 합니다. 모든 예외는 기본 RCDException을 상속받습니다.
"""

class RCDException(Exception):
    """
    이 프로젝트(Reinforced Concrete Design)의 모든 사용자 정의 예외에 대한 기본 클래스입니다.
    이 클래스를 직접 발생시키기보다는, 이를 상속받는 더 구체적인 예외를 사용합니다.
    """
    pass

# --- 입력값 및 정의 관련 오류 ---

class MaterialError(RCDException):
    """재료 정의와 관련된 오류에 대한 기본 클래스입니다."""
    pass

class UndeterminedMaterialError(MaterialError):
    """
    노출등급이 선택되지 않아(fck = 0) 콘크리트 강도가 결정되지 않은 상태에서
    설계를 시도할 때 발생하는 예외입니다.
    """
    def __init__(self, message: str = "Concrete class is undetermined: select at least one exposure class."):
        self.message = message
        super().__init__(self.message)

class SectionError(RCDException):
    """단면 정의와 관련된 오류에 대한 기본 클래스입니다."""
    pass

# --- 설계 계산 과정에서 발생하는 오류 ---

class DesignError(RCDException):
    """설계 계산 과정에서 발생하는 일반적인 오류에 대한 기본 클래스입니다."""
    pass

class DomainError(DesignError):
    """공식의 입력값이 정의역을 벗어났을 때 발생하는 오류의 기본 클래스입니다."""
    pass

class OutOfDomainError(DomainError):
    """
    공식의 입력값이 수학적/공학적 정의역 밖에 있을 때 발생하는 예외입니다.
    (예: μ > 0.5 이면 √(1 - 2μ) 가 정의되지 않음)
    """
    def __init__(self, name: str, value: float, condition: str):
        message = f"{name}={value:.6g} is out of domain ({condition})."
        self.name = name
        self.value = value
        self.message = message
        super().__init__(self.message)

class ZeroDivisorError(DomainError, ZeroDivisionError):
    """공식의 분모가 0이 되는 입력에 대해 발생하는 예외입니다. (예: b = 0, d = 0, x = 0)"""
    def __init__(self, name: str):
        message = f"Division by zero: '{name}' must be non-zero."
        self.name = name
        self.message = message
        super().__init__(self.message)
