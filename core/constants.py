# core/constants.py

"""
Eurocode 2 (EN 1992-1-1) 휨 설계에 사용되는 상수 모음.
단위: 길이 m, 응력 MPa, 모멘트 kN·m, 면적 m^2.
"""

# --- 부분안전계수 (EN 1992-1-1 표 2.1N) ---
GAMMA_C = 1.5
GAMMA_S = 1.15

# --- 콘크리트 ---
CONCRETE_ULTIMATE_STRAIN = 3.5e-3       # εcu2 (fck <= 50 MPa)
FCM_OFFSET = 8.0                        # fcm = fck + 8 MPa (표 3.1)
FCTM_FACTOR = 0.3                       # fctm = 0.30·fck^(2/3)
ECM_FACTOR = 22000.0                    # Ecm = 22·(fcm/10)^0.3 GPa
ECM_EXPONENT = 0.3

# --- 직사각형 응력블록 (3.1.7(3)) ---
STRESS_BLOCK_DEPTH = 0.8                # λ
LEVER_ARM_FACTOR = 0.4                  # λ/2
COMPRESSION_PARAMETER_FACTOR = 1.25     # 1/λ
MAX_REDUCED_MOMENT = 0.5                # 1 - 2μ >= 0

# --- 철근 ---
HARDENING_RATIO = 1.08                  # k = (ft/fy)k, Class B
# εuk 는 5% (5‰ 가 아님) : 5‰ 이면 보통 변형률에서도 σs > k·fyd 가 됨
STEEL_ULTIMATE_STRAIN = 5.0e-2          # εuk, Class B (부록 C)

# --- 최소철근량 (9.2.1.1(1)) ---
MIN_REINFORCEMENT_FACTOR = 0.26

# --- 압축철근 위치: 상·하면에서 0.1h ---
COMPRESSION_STEEL_COVER_RATIO = 0.1

# --- 유효깊이 비율 (d = ratio·h) ---
EFFECTIVE_DEPTH_RATIOS = (0.85, 0.9)
DEFAULT_EFFECTIVE_DEPTH_RATIO = 0.9

# --- 단위 변환 ---
KNM_TO_MNM = 1e-3                       # kN·m -> MN·m (MPa·m^3)
MNM_TO_KNM = 1e3
M2_TO_CM2 = 1e4
