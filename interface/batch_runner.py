# interface/batch_runner.py

import itertools
import pandas as pd
from tqdm.auto import tqdm
from typing import Dict, List, Any, Tuple

import core.constants as const
from core.material.exposure import ExposureSelection
from core.material.material import MaterialState, material_state_for, resolve_materials
from core.section.rectangular import Geometry
from core.engine import DesignEngine
from core.exceptions import RCDException

class BatchRunner:
    """
    설계 파라미터의 여러 조합에 대한 배치 실행을 관리하고 결과를 생성합니다.

    콘크리트 강도는 'exposure' (노출등급 코드 튜플) 또는 'fck' 로 지정합니다.
    두 키가 모두 있으면 'exposure' 가 우선합니다.
    """
    def __init__(self, params: Dict[str, List[Any]], show_progress: bool = True):
        self.params = params
        self.engine = DesignEngine()
        self.show_progress = show_progress
        self.results = []

    def run(self):
        """배치 실행을 시작하고 모든 조합에 대한 계산을 수행합니다."""
        combinations = self._generate_combinations()

        for combo in tqdm(combinations, desc="Batch Processing", ncols=120, disable=not self.show_progress):
            try:
                geometry, materials = self._setup_case_from_combo(combo)
                self._run_design(geometry, materials, combo)
            except RCDException as e:
                self.results.append({**self._flatten(combo), "status": "Error", "message": str(e)})
            except Exception as e:
                self.results.append({**self._flatten(combo), "status": "Critical Error", "message": str(e)})
        return self.results

    def _generate_combinations(self) -> List[Dict[str, Any]]:
        """itertools.product를 사용하여 모든 파라미터 조합 딕셔너리를 생성합니다."""
        keys = self.params.keys()
        values = self.params.values()
        return [dict(zip(keys, p)) for p in itertools.product(*values)]

    def _run_design(self, geometry: Geometry, materials: MaterialState, combo: Dict[str, Any]):
        """[설계 모드] 조합 하나에 대해 설계를 수행하고 결과 행을 추가합니다."""
        result = self.engine.run_design(geometry, materials)
        output = {
            **self._flatten(combo),
            "structural_class": materials.structural_class,
            "fck": materials.fck,
            "fcd": materials.fcd,
            "fctm": materials.fctm,
            "d": geometry.effective_depth,
            "branch": result.branch,
            "mu": result.mu,
            "xi": result.xi,
            "x": result.x,
            "z": result.z,
            "eps_s": result.eps_s,
            "sigma_s": result.sigma_s,
            "as_required": result.as_required,
            "as_min": result.as_min,
            "as_th": result.as_th,
            "as_compressed": result.as_compressed,
            "is_min_controlled": result.is_min_rebar_controlled,
            "status": "OK",
        }
        self.results.append(output)

    def _setup_case_from_combo(self, combo: Dict[str, Any]) -> Tuple[Geometry, MaterialState]:
        """조합으로부터 Geometry 와 MaterialState 를 생성합니다."""
        grade = combo.get('grade', 'S500')
        if 'exposure' in combo:
            selection = ExposureSelection(
                classes=tuple(combo['exposure']),
                fabrication=combo.get('fabrication', 'cast_in_place'),
                specimen=combo.get('specimen', 'cylindrical'),
            )
            materials = resolve_materials(selection, grade)
        elif 'fck' in combo:
            materials = material_state_for(float(combo['fck']), grade)
        else:
            raise ValueError("Each combination needs either 'exposure' or 'fck'.")

        geometry = Geometry(
            width=float(combo['width']),
            height=float(combo['height']),
            moment=float(combo['moment']),
            depth_ratio=float(combo.get('ratio', const.DEFAULT_EFFECTIVE_DEPTH_RATIO)),
        )
        return geometry, materials

    @staticmethod
    def _flatten(combo: Dict[str, Any]) -> Dict[str, Any]:
        """[내부용] CSV 한 칸에 들어가도록 튜플 값을 문자열로 바꿉니다."""
        return {k: "+".join(v) if isinstance(v, (tuple, list)) else v for k, v in combo.items()}

    def to_dataframe(self) -> pd.DataFrame:
        """결과를 DataFrame 으로 변환하고 면적을 cm^2 로 환산합니다."""
        df = pd.DataFrame(self.results)

        # --- 출력의 단위 변환은 여기서 일괄 수행 ---
        # As 는 cm2 단위로 출력
        cm2_cols = ['as_required', 'as_min', 'as_th', 'as_compressed']
        for col in df.columns:
            if col in cm2_cols:
                df[col] = pd.to_numeric(df[col], errors='coerce') * const.M2_TO_CM2
        return df

    def save_to_csv(self, filename: str):
        """결과를 CSV 파일로 저장합니다."""
        if not self.results:
            print("결과가 없습니다. 저장할 내용이 없습니다.")
            return

        self.to_dataframe().to_csv(filename, index=False, encoding='utf-8-sig')
