import pytest

from common.errors import InvalidInputError, ProcessUnavailableError, UnknownUnitError
from common.models import EosModel, ProcessPoint
from process.session import Session, SessionConfig

def test_default_startup_is_air_at_standard_conditions(fake_factory):
    s = Session(factory=fake_factory)
    assert s.gas_name == "Air"
    assert s.model is EosModel.GERG2008
    assert s.view.current.p == pytest.approx(101.325, rel=1e-4)
    assert s.view.current.t == pytest.approx(288.71, abs=0.01)

def test_set_pressure_in_display_units(session):
    session.set_unit("pressure", "PSI")
    session.set_pressure(14.696)
    assert session.view.current.p == pytest.approx(101.325, rel=1e-4)
    assert session.properties()["pressure"] == pytest.approx(14.696)

def test_set_temperature_in_display_units(session):
    session.set_unit("temperature", "F")
    session.set_temperature(60.0)
    assert session.view.current.t == pytest.approx(288.71, abs=0.01)

def test_every_mutation_recalculates(session):
    rev = session.view.revision
    session.set_pressure(150.0)
    session.set_gas_by_name("Nitrogen")
    session.set_inlet()
    assert session.view.revision == rev + 3

def test_inlet_snapshots_current(session):
    session.set_inlet()
    session.set_pressure(250.0)
    inlet = session.record(ProcessPoint.INLET)
    assert inlet.p == pytest.approx(100.0)
    assert inlet.t == pytest.approx(300.0)
    assert inlet.comp == session.view.current.comp

def test_gas_change_reaches_inlet_and_outlet(compression):
    compression.set_gas_by_name("Helium")
    for point in ProcessPoint:
        assert compression.record(point).comp == {"helium": 1.0}

def test_invalid_input_leaves_state_unchanged(session):
    before = session.view
    with pytest.raises(InvalidInputError):
        session.apply_input("pressure", "twelve")
    after = session.view
    assert after.revision == before.revision
    assert after.current == before.current

def test_apply_input_parses_text(session):
    session.apply_input("temperature", " 320.5 ")
    assert session.view.current.t == pytest.approx(320.5)
    with pytest.raises(KeyError):
        session.apply_input("viscosity", "1.0")

def test_unknown_unit_leaves_units(session):
    units = session.units
    with pytest.raises(UnknownUnitError):
        session.set_unit("pressure", "mmHg")
    assert session.units == units

def test_undefined_point_is_unavailable(session):
    with pytest.raises(ProcessUnavailableError):
        session.properties(ProcessPoint.OUTLET)
    with pytest.raises(ProcessUnavailableError):
        session.process()

def test_clear(compression):
    compression.clear()
    assert not compression.view.has_process
    with pytest.raises(ProcessUnavailableError):
        compression.process()

def test_switch_model(compression):
    gerg = compression.process()
    compression.switch_model()
    assert compression.model is EosModel.AGA8
    aga8 = compression.process()
    assert aga8.ave_cp_cv != pytest.approx(gerg.ave_cp_cv)

def test_display_properties_follow_units(compression):
    compression.set_unit("energy", "kJ/kg")
    rec = compression.record(ProcessPoint.INLET)
    props = compression.properties(ProcessPoint.INLET)
    assert props["enthalpy"] == pytest.approx(rec.h / rec.mm)
    disp = compression.process_display()
    assert disp["enthalpy_change"] == pytest.approx(
        (compression.record(ProcessPoint.OUTLET).h - rec.h) / rec.mm)

def test_machine_inputs(session):
    session.apply_input("input_speed", "3000")
    session.apply_input("gear_ratio", "2")
    session.apply_input("wheel_diameter", "0.5")
    m = session.machine()
    assert m.wheel_speed.to("rpm").magnitude == pytest.approx(6000.0)
    assert m.tip_speed.to("m/s").magnitude == pytest.approx(157.0796, rel=1e-5)

def test_stp_toggle_changes_standard_flow(session):
    session.set_flow(1.0)
    session.set_unit("flow", "scfm")
    at_60 = session.flow()
    session.set_stp_60f(False)
    assert session.flow() > at_60

def test_custom_composition(fake_factory):
    s = Session(SessionConfig(composition={"methane": 1.0}), factory=fake_factory)
    assert s.gas_name == "Custom"
    assert s.view.current.mm == pytest.approx(16.043)

def test_unknown_component_rejected_before_mutation(session):
    before = session.view
    with pytest.raises(ValueError):
        session.set_gas({"unobtainium": 1.0})
    after = session.view
    assert after.current.comp == before.current.comp
    assert after.revision == before.revision
    assert session.gas_name == "Air"

def test_unknown_component_in_config(fake_factory):
    with pytest.raises(ValueError):
        Session(SessionConfig(composition={"unobtainium": 1.0}), factory=fake_factory)
