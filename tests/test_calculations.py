import logging
import math
import pytest

from common.errors import ProcessUnavailableError
from common.results import ProcessMode
from common.units import Q_
from conversion.display import Temperature
from process import calculations as calc
from process.session import Session, SessionConfig

R = 8.314462618

K = 1.4  # cp/cv of the GERG fake

def test_classify():
    assert calc.classify(2.0) is ProcessMode.COMPRESSION
    assert calc.classify(0.5) is ProcessMode.EXPANSION
    assert calc.classify(1.0) is ProcessMode.ISOBARIC

def test_pressure_ratio_two_is_compression(fake_factory):
    s = Session(SessionConfig(pressure=Q_(100.0, "kPa"), temperature=Q_(300.0, "K")), factory=fake_factory)
    s.set_inlet()
    s.set_pressure(200.0)
    s.set_temperature(340.0)
    view = s.set_outlet()
    assert calc.pressure_ratio(view) == pytest.approx(2.0)
    assert calc.process_mode(view) is ProcessMode.COMPRESSION

def test_ratios_and_changes(compression):
    view = compression.view
    assert calc.temperature_ratio(view) == pytest.approx(400.0 / 300.0)
    assert calc.density_ratio(view) == pytest.approx(1.5)
    assert calc.temperature_change(view) == pytest.approx(100.0)
    assert calc.temperature_change(view, Temperature.F) == pytest.approx(180.0)
    assert calc.enthalpy_change(view) == pytest.approx(3.5 * R * 100.0)
    assert calc.ave_cp_cv(view) == pytest.approx(K)

def test_isentropic_path(compression):
    view = compression.view
    ts = 300.0 * 2.0 ** ((K - 1.0) / K)
    assert calc.isentropic_outlet_temperature(view) == pytest.approx(ts)
    assert calc.isentropic_enthalpy_change(view) == pytest.approx(3.5 * R * (ts - 300.0))
    eff = calc.isentropic_efficiency(view)
    assert eff.value == pytest.approx((ts - 300.0) / 100.0)
    assert not eff.out_of_range

def test_polytropic_path(compression):
    view = compression.view
    n = math.log(2.0) / math.log(1.5)
    assert calc.polytropic_exponent(view) == pytest.approx(n)
    assert calc.polytropic_efficiency(view).value == pytest.approx(n / (n - 1.0) * (K - 1.0) / K)

def test_zero_denominator_gives_zero_efficiency():
    # compression: h_out == h_in
    assert calc.efficiency_from_enthalpies(2.0, 10.0, 10.0, 20.0).value == 0.0
    # expansion: hs == h_in
    assert calc.efficiency_from_enthalpies(0.5, 10.0, 5.0, 10.0).value == 0.0

def test_expansion_efficiency_branch():
    eff = calc.efficiency_from_enthalpies(0.5, 100.0, 80.0, 75.0)
    assert eff.value == pytest.approx(20.0 / 25.0)

def test_polytropic_singular_when_density_ratio_is_one():
    n = calc.exponent_from_ratios(2.0, 1.0)
    assert not math.isfinite(n)
    assert math.isnan(calc.exponent_from_ratios(1.0, 1.0))
    eff = calc.efficiency_from_exponent(n, K)
    assert math.isnan(eff.value)
    assert eff.out_of_range

def test_out_of_range_efficiency_is_logged(fake_factory, caplog):
    s = Session(SessionConfig(pressure=Q_(100.0, "kPa"), temperature=Q_(300.0, "K")), factory=fake_factory)
    s.set_inlet()
    s.set_pressure(200.0)
    s.set_temperature(340.0)
    s.set_outlet()
    with caplog.at_level(logging.WARNING):
        res = s.process()
    assert res.isentropic_efficiency.out_of_range
    assert "isentropic efficiency" in caplog.text

def test_process_needs_both_points(session):
    session.set_inlet()
    with pytest.raises(ProcessUnavailableError):
        calc.run_calculations(session.view)

def test_work_uses_mass_basis(compression):
    view = compression.view
    i, _ = view.endpoints()
    w = calc.work(view, Q_(2.0, "kg/s"))
    assert w.to("kW").magnitude == pytest.approx(3.5 * R * 100.0 / i.mm * 2.0)

def test_tip_speed_and_mach(session):
    u = calc.tip_speed(Q_(0.5, "m"), Q_(6000.0, "rpm"))
    assert u.to("m/s").magnitude == pytest.approx(math.pi * 0.5 * 100.0)
    m = calc.machine_data(session.view, Q_(3000.0, "rpm"), 2.0, Q_(0.5, "m"))
    assert m.wheel_speed.to("rpm").magnitude == pytest.approx(6000.0)
    assert m.tip_mach == pytest.approx(u.magnitude / session.view.current.w)
    assert m.is_set
    assert math.isnan(calc.tip_mach(u, 0.0))

def test_run_calculations_bundle(compression):
    res = calc.run_calculations(compression.view, mass_flow=Q_(1.0, "kg/s"))
    assert res.mode is ProcessMode.COMPRESSION
    assert res.pressure_ratio == pytest.approx(2.0)
    assert res.isentropic_enthalpy_change == pytest.approx(res.isentropic_enthalpy - 3.5 * R * 300.0)
    assert res.work.check("[power]")
