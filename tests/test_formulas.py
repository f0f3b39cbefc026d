# tests/test_formulas.py

import math

import pytest

import core.formulas as f
from core.exceptions import DomainError, OutOfDomainError, ZeroDivisorError


class TestMaterialFormulas:

    def test_mean_compressive_strength(self):
        assert f.mean_compressive_strength(25) == 33

    def test_design_compressive_strength(self):
        assert f.design_compressive_strength(25) == pytest.approx(16.6667, rel=1e-4)

    def test_mean_tensile_strength(self):
        # fctm = 0.3 * 25^(2/3) = 2.565 MPa (EN 1992-1-1 표 3.1: 2.6)
        assert f.mean_tensile_strength(25) == pytest.approx(2.5649, rel=1e-3)
        assert f.mean_tensile_strength(0) == 0

    def test_mean_tensile_strength_is_monotonic(self):
        values = [f.mean_tensile_strength(fck) for fck in range(0, 91, 5)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_mean_tensile_strength_rejects_negative(self):
        with pytest.raises(OutOfDomainError):
            f.mean_tensile_strength(-1)

    def test_elastic_modulus(self):
        # C25/30: Ecm = 22000 * 3.3^0.3 = 31476 MPa
        assert f.elastic_modulus(33) == pytest.approx(31476, rel=1e-3)

    def test_design_yield_strength(self):
        assert f.design_yield_strength(500) == pytest.approx(434.78, rel=1e-4)

    def test_limiting_strain_ratio_matches_grade_table(self):
        # μy = 0.8·ξy·(1 - 0.4·ξy) 가 강종 표값 0.372 / 0.392 와 일치
        for eps_y, mu_y in ((2.17e-3, 0.372), (1.74e-3, 0.392)):
            xi = f.limiting_strain_ratio(eps_y)
            assert 0.8 * xi * (1 - 0.4 * xi) == pytest.approx(mu_y, abs=1e-3)


class TestBendingFormulas:

    def test_reduced_moment(self):
        # 100 kN.m / (0.30 * 0.45^2 * 16.667 MPa * 10^3) = 0.0988
        assert f.reduced_moment(100, 0.30, 0.45, 25 / 1.5) == pytest.approx(0.098765, rel=1e-4)

    @pytest.mark.parametrize("b, d, fcd", [(0, 0.45, 16.67), (0.3, 0, 16.67), (0.3, 0.45, 0)])
    def test_reduced_moment_rejects_zero_divisor(self, b, d, fcd):
        with pytest.raises(ZeroDivisorError):
            f.reduced_moment(100, b, d, fcd)

    def test_zero_divisor_error_is_also_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            f.tensile_steel_strain(0.45, 0.0)

    def test_branch_predicate_is_a_pure_threshold(self):
        assert f.is_under_reinforced(0.30, 0.372)
        assert f.is_under_reinforced(0.372, 0.372)
        assert not f.is_under_reinforced(0.3721, 0.372)

    def test_compression_parameter_bounds(self):
        assert f.compression_parameter(0.0) == 0.0
        assert f.compression_parameter(0.5) == pytest.approx(1.25)

    def test_compression_parameter_is_increasing(self):
        mus = [i / 100 for i in range(0, 51)]
        xis = [f.compression_parameter(mu) for mu in mus]
        assert all(0.0 <= xi <= 1.25 for xi in xis)
        assert all(a < b for a, b in zip(xis, xis[1:]))

    @pytest.mark.parametrize("mu", [0.5001, 0.8, -0.01, math.nan])
    def test_compression_parameter_rejects_out_of_domain(self, mu):
        with pytest.raises(OutOfDomainError):
            f.compression_parameter(mu)

    def test_geometry_chain(self):
        x = f.compression_depth(0.45, 0.2)
        assert x == pytest.approx(0.09)
        assert f.lever_arm(0.45, x) == pytest.approx(0.414)
        # εs = (0.45 - 0.09) / 0.09 * 3.5e-3 = 0.014
        assert f.tensile_steel_strain(0.45, x) == pytest.approx(0.014)

    def test_compressed_steel_strain(self):
        assert f.compressed_steel_strain(0.25, 0.05) == pytest.approx(0.0028)


class TestSteelStress:

    def test_class_b_stress_is_fyd_at_yield(self):
        assert f.steel_stress_class_b(434.78, 2.17e-3, 2.17e-3) == pytest.approx(434.78)

    def test_class_b_stress_reaches_k_fyd_at_ultimate_strain(self):
        assert f.steel_stress_class_b(434.78, 0.05, 2.17e-3) == pytest.approx(1.08 * 434.78)

    def test_class_b_stress_is_bounded(self):
        fyd = 434.78
        for eps in (0.0, 1e-3, 0.01, 0.03, 0.2):
            sigma = f.steel_stress_class_b(fyd, eps, 2.17e-3)
            assert fyd - 1e-9 <= sigma <= 1.08 * fyd + 1e-9

    def test_plastic_stress(self):
        assert f.plastic_steel_stress(347.83) == 347.83


class TestAreas:

    def test_required_tensile_area(self):
        # 100 kN.m / (434.78 MPa * 0.4 m) = 5.75e-4 m^2
        assert f.required_tensile_area(100, 434.78, 0.4) == pytest.approx(5.75e-4, rel=1e-3)

    def test_minimum_tensile_area(self):
        assert f.minimum_tensile_area(0.3, 0.45, 2.565, 500) == pytest.approx(1.8006e-4, rel=1e-3)

    @pytest.mark.parametrize("as_calc, as_min", [(5e-4, 2e-4), (1e-4, 2e-4), (2e-4, 2e-4), (0.0, 1e-4)])
    def test_governing_area_is_max(self, as_calc, as_min):
        governing = f.governing_area(as_calc, as_min)
        assert governing >= as_calc
        assert governing >= as_min
        assert governing in (as_calc, as_min)

    def test_doubly_reinforced_areas(self):
        mu1 = f.moment_carried_by_tension_steel(0.3, 0.25, 20.0, 0.35)
        assert mu1 == pytest.approx(420.0)
        mu2 = f.residual_moment(500, mu1)
        assert mu2 == pytest.approx(80.0)
        # A's = 0.080 MN.m / (400 MPa * 0.40 m) = 5e-4 m^2
        assert f.compressed_steel_area(mu2, 400, 0.45, 0.05) == pytest.approx(5e-4)
        total = f.doubly_reinforced_tensile_area(mu1, mu2, 400, 0.35, 0.45, 0.05)
        assert total == pytest.approx(0.420 / (400 * 0.35) + 0.080 / (400 * 0.40))

    def test_compressed_area_rejects_coincident_layers(self):
        with pytest.raises(DomainError):
            f.compressed_steel_area(50, 400, 0.05, 0.05)
