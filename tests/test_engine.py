# tests/test_engine.py

import pytest

from core.engine import DesignEngine, run_design
from core.exceptions import OutOfDomainError, SectionError, UndeterminedMaterialError
from core.material.exposure import ExposureSelection, Fabrication, Specimen
from core.material.material import material_state_for, resolve_materials
from core.section.rectangular import Geometry


@pytest.fixture
def engine():
    return DesignEngine()


@pytest.fixture
def c25_s500():
    # XC2, 현장타설, 원주형 -> C25
    selection = ExposureSelection(("XC2",), Fabrication.CAST_IN_PLACE, Specimen.CYLINDRICAL)
    return resolve_materials(selection, "S500")


def beam(moment, ratio=0.9):
    return Geometry(width=0.30, height=0.50, moment=moment, depth_ratio=ratio)


class TestGeometry:

    def test_effective_depth_is_derived(self):
        geometry = beam(100)
        assert geometry.effective_depth == pytest.approx(0.45)
        assert geometry.compression_steel_depth == pytest.approx(0.05)
        taller = geometry.with_changes(height=0.60)
        assert taller.effective_depth == pytest.approx(0.54)
        assert geometry.with_changes(depth_ratio=0.85).effective_depth == pytest.approx(0.425)

    @pytest.mark.parametrize("kwargs", [
        dict(width=0.0, height=0.5, moment=100),
        dict(width=0.3, height=-0.5, moment=100),
        dict(width=0.3, height=0.5, moment=float("nan")),
        dict(width=0.3, height=0.5, moment=100, depth_ratio=0.8),
    ])
    def test_invalid_geometry(self, kwargs):
        with pytest.raises(SectionError):
            Geometry(**kwargs)


class TestSinglyReinforced:

    def test_scas_scenario(self, engine, c25_s500):
        result = engine.run_design(beam(100), c25_s500)

        assert c25_s500.fcd == pytest.approx(16.667, rel=1e-4)
        assert result.mu == pytest.approx(0.098765, rel=1e-4)
        assert result.is_scas
        assert result.branch == "SCAS"
        assert result.xi == pytest.approx(0.13024, rel=1e-3)
        assert result.x == pytest.approx(0.45 * result.xi)
        assert result.z == pytest.approx(0.45 - 0.4 * result.x)
        assert result.eps_s == pytest.approx(0.02337, rel=1e-3)
        # S500: 경사 상단 분기, fyd < σs < 1.08 fyd
        assert 434.78 < result.sigma_s < 1.08 * 434.79
        assert result.sigma_s == pytest.approx(450.2, rel=1e-3)
        assert result.as_required == pytest.approx(5.207e-4, rel=1e-3)
        assert result.as_min == pytest.approx(1.8006e-4, rel=1e-3)
        assert result.as_th == max(result.as_required, result.as_min)
        assert result.as_th >= result.as_min
        assert result.as_compressed is None
        assert result.as_compressed_th is None

    def test_scas_trace(self, engine, c25_s500):
        result, steps = run_design(beam(100), c25_s500)
        assert steps == result.steps
        # μ, 판정, ξ, x, z, εs, σs, As, As,min, As,th
        assert len(steps) == 10
        assert r"\leq" in steps[1].formula
        assert "SCAS" in steps[1].result
        assert steps[-1].result.startswith("As,th = ")
        assert "cm²" in steps[-1].result
        assert all(step.title and step.formula and step.result for step in steps)

    def test_s400_uses_design_yield_stress(self, engine):
        materials = material_state_for(25, "S400")
        result = engine.run_design(beam(100), materials)
        assert result.is_scas
        assert result.sigma_s == pytest.approx(400 / 1.15)

    def test_small_moment_is_min_rebar_controlled(self, engine, c25_s500):
        result = engine.run_design(beam(10), c25_s500)
        assert result.is_min_rebar_controlled
        assert result.as_th == result.as_min

    def test_negative_moment_is_out_of_domain(self, engine, c25_s500):
        with pytest.raises(OutOfDomainError):
            engine.run_design(beam(-50), c25_s500)


class TestDoublyReinforced:

    def test_saas_scenario(self, engine, c25_s500):
        result = engine.run_design(beam(450), c25_s500)

        assert result.mu == pytest.approx(0.4444, rel=1e-3)
        assert not result.is_scas
        assert result.branch == "SAAS"
        # ξ 는 강종 한계값에 고정
        assert result.xi == pytest.approx(c25_s500.xi_limit)
        assert result.x == pytest.approx(0.27778, rel=1e-3)
        assert result.z == pytest.approx(0.33889, rel=1e-3)
        assert result.eps_s == pytest.approx(2.17e-3, rel=1e-3)
        assert result.sigma_s == pytest.approx(434.78, rel=1e-3)
        assert result.eps_s_prime == pytest.approx(2.87e-3, rel=1e-3)
        assert result.mu1 == pytest.approx(376.54, rel=1e-3)
        assert result.mu2 == pytest.approx(450 - result.mu1)
        assert result.as_compressed > 0
        assert result.as_compressed == pytest.approx(4.219e-4, rel=2e-3)
        assert result.as_compressed_th == result.as_compressed

        balanced = result.mu1 * 1e-3 / (result.sigma_s * result.z)
        residual = result.mu2 * 1e-3 / (result.sigma_s * (0.45 - 0.05))
        assert result.as_required == pytest.approx(balanced + residual)
        assert result.as_required == pytest.approx(2.978e-3, rel=2e-3)
        assert result.as_th == max(result.as_required, result.as_min)

    def test_saas_trace(self, engine, c25_s500):
        result = engine.run_design(beam(450), c25_s500)
        assert ">" in result.steps[1].formula
        assert "SAAS" in result.steps[1].result
        # μ, 판정, ξ, x, z, εs, σs, ε's, σ's, Mu1, Mu2, A's, As, As,min, As,th, A's,th
        assert len(result.steps) == 16
        assert result.steps[-1].result.startswith("A's,th = ")

    @pytest.mark.parametrize("grade", ["S400", "S500"])
    @pytest.mark.parametrize("ratio", [0.85, 0.9])
    def test_compressed_steel_always_yields(self, engine, grade, ratio):
        # d' = 0.1h, x = ξy·ratio·h -> ε's >= (1 - 0.1/(0.617*0.85))·3.5e-3 ≈ 2.83e-3 > εy
        materials = material_state_for(25, grade)
        geometry = Geometry(width=0.30, height=0.50, moment=450, depth_ratio=ratio)
        result = engine.run_design(geometry, materials)
        assert not result.is_scas
        assert result.eps_s_prime > materials.eps_y
        assert result.eps_s_prime >= 2.8e-3
        assert result.sigma_s_prime == pytest.approx(materials.steel.design_stress(result.eps_s_prime))
        assert result.sigma_s_prime >= materials.fyd


class TestEngineContract:

    def test_threshold_equality_is_scas(self, engine, c25_s500):
        # μ == μy 가 되도록 Med 를 역산
        med = 0.372 * 0.30 * 0.45 ** 2 * c25_s500.fcd * 1e3
        result = engine.run_design(beam(med), c25_s500)
        assert result.mu == pytest.approx(0.372)
        assert result.is_scas == (result.mu <= 0.372)

    def test_runs_are_idempotent(self, engine, c25_s500):
        first = engine.run_design(beam(450), c25_s500)
        second = engine.run_design(beam(450), c25_s500)
        assert first == second
        assert first.steps == second.steps

    def test_undetermined_materials_are_rejected(self, engine):
        materials = resolve_materials(ExposureSelection(), "S500")
        with pytest.raises(UndeterminedMaterialError):
            engine.run_design(beam(100), materials)

    def test_reresolving_after_input_change(self, engine):
        selection = ExposureSelection(("XC1",))
        low = engine.run_design(beam(100), resolve_materials(selection, "S500"))
        high = engine.run_design(beam(100), resolve_materials(selection.toggle("XA3"), "S500"))
        # C20 -> C40 : μ 감소
        assert high.mu < low.mu
