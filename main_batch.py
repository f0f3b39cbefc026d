# main_batch.py

import time

import numpy as np
from interface.batch_runner import BatchRunner


# =================================
# 사용자 배치 실행 시나리오 정의
# =================================

# --- 노출등급 조합별 설계 ---
exposure_design = {
    "exposure": [("XC1",), ("XC3", "XD1"), ("XS2", "XF4"), ("XA3",)],
    "fabrication": ["cast_in_place", "precast"],
    "specimen": ["cylindrical"],
    "grade": ["S400", "S500"],
    "width": [0.30], "height": [0.50], "ratio": [0.9],
    "moment": [100, 250, 450],  # kN.m
}

# --- 콘크리트 강도 / 단면 높이 변화 (fck 직접 지정) ---
strength_sweep = {
    "fck": [20, 25, 30, 35, 40],
    "grade": ["S500"],
    "width": [0.30],
    "height": np.linspace(0.40, 0.80, int(round((0.80-0.40)/0.05))+1).round(3),
    "ratio": [0.9],
    "moment": [150, 300],  # kN.m
}

# --- 휨모멘트 변화 (SCAS -> SAAS 전이 확인) ---
moment_sweep = {
    "fck": [25],
    "grade": ["S400", "S500"],
    "width": [0.30], "height": [0.50], "ratio": [0.85, 0.9],
    "moment": np.linspace(50, 600, int((600-50)/25)+1),
}


def main():
    """
    EC2 Beam Designer (Batch Mode)의 메인 실행 함수.
    치수 단위 : m, 재료 : MPa, 휨모멘트 : kN.m
    철근량은 CSV 출력 시 cm2 로 환산됩니다.
    """
    print("="*50)
    print("    EC2 Beam Designer - Batch Mode")
    print("="*50)

    # 실행할 배치 입력
    # param = exposure_design ; output_filename = 'batch_exposure_design_result'
    # param = strength_sweep ; output_filename = 'batch_strength_sweep_result'
    param = moment_sweep ; output_filename = 'batch_moment_sweep_result'

    outfile_name = str(output_filename + '.csv')

    start_time = time.time()

    runner = BatchRunner(param)
    runner.run()
    runner.save_to_csv(outfile_name)

    print(f"'{outfile_name}' 의 결과 파일로 저장됩니다.")
    end_time = time.time()
    print(f"총 실행 시간: {end_time - start_time:.2f} 초")

if __name__ == "__main__":
    main()
