# main.py

import sys

from loguru import logger

import core.constants as const
from interface import cli
from services.bar_selector import BAR_DIAMETERS_MM

# ==========================================================
# 사용자 설정 (User Configuration)
# ==========================================================
# 이 부분만 수정하면 프로그램 전체에 적용됩니다.
CALCULATION_DIAMETERS = [10, 12, 14, 16, 20, 25, 32]  # 배근 제안에 사용할 철근 직경 (mm)
DEFAULT_DEPTH_RATIO = 0.9                             # 유효깊이 비율 기본값 (0.85 또는 0.9)
SHOW_CALCULATION_STEPS = True                         # 계산 과정 출력 여부
LOG_LEVEL = "WARNING"                                 # 콘솔 로그 레벨 (DEBUG 로 바꾸면 분기 판정 로그 출력)

def validate_configuration():
    """
    사용자 설정값이 프로그램에서 지원하는 범위 내에 있는지 확인합니다.
    """
    all_supported_dias = set(BAR_DIAMETERS_MM)
    user_selected_dias = set(CALCULATION_DIAMETERS)

    errors = []
    if not user_selected_dias.issubset(all_supported_dias):
        unsupported_dias = user_selected_dias - all_supported_dias
        errors.append(f"다음 철근 직경은 지원하지 않습니다: {sorted(unsupported_dias)} "
                      f"(지원 가능: {sorted(all_supported_dias)})")
    if DEFAULT_DEPTH_RATIO not in const.EFFECTIVE_DEPTH_RATIOS:
        errors.append(f"DEFAULT_DEPTH_RATIO 는 {const.EFFECTIVE_DEPTH_RATIOS} 중 하나여야 합니다.")

    if errors:
        print("="*50)
        print("❌ 설정 오류 (Configuration Error)")
        for message in errors:
            print(f"  - {message}")
        print("main.py 상단의 사용자 설정을 수정해주세요.")
        print("="*50)
        sys.exit(1)

def configure_logging():
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL,
               format="{time:HH:mm:ss} | {level:<8} | {name}:{function} - {message}")

def get_user_choice():
    """사용자로부터 실행할 모드를 입력받습니다."""
    while True:
        print("\n어떤 작업을 수행하시겠습니까?")
        print("  1: 단면 설계 (소요철근량 산정 및 배근 제안)")
        print("  2: 노출등급 조회 (지배 콘크리트 강도)")
        print("  Q: 종료 (Quit)")
        choice = input("선택: ").strip().upper()
        if choice in ['1', '2', 'Q']:
            return choice
        else:
            print("잘못된 입력입니다. 1, 2, Q 중에서 선택해주세요.")

def main():
    """
    EC2 Beam Designer 프로그램의 메인 실행 함수.
    """
    print("="*50)
    print("      EC2 Beam Flexural Design Calculator")
    print("="*50)
    print("이 프로그램은 EN 1992-1-1 에 따라 사각형 보의 휨철근을 설계합니다.")
    print("치수 단위는 'm', 재료강도 단위는 'MPa', 휨모멘트 단위는 'kN.m' 입니다.")

    # --- 프로그램 시작 시 설정값부터 검증 ---
    validate_configuration()
    configure_logging()

    while True:
        choice = get_user_choice()

        if choice == '1':
            cli.run_design_workflow(CALCULATION_DIAMETERS, DEFAULT_DEPTH_RATIO, SHOW_CALCULATION_STEPS)
        elif choice == '2':
            cli.run_exposure_workflow()
        elif choice == 'Q':
            break

    print("\n프로그램을 종료합니다.")

if __name__ == "__main__":
    main()
