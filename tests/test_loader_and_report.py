from pathlib import Path
import pytest

from common.models import EosModel
from common.results import write_results_csvs
from common.units import Q_
from conversion.display import Pressure, Flow
from loader import _q, load_session
from process.report import NA, process_table, session_process_table, state_table

CONFIG = Path(__file__).resolve().parents[1] / "config" / "session.yaml"

def test__q_parses_quantity():
    q = _q({"value": 14.696, "unit": "psi"})
    assert isinstance(q, Q_)
    assert q.to("kPa").magnitude == pytest.approx(101.325, rel=1e-4)

def test__q_rejects_bare_number():
    with pytest.raises(ValueError):
        _q(14.696)

def test_load_default_session():
    cfg = load_session(str(CONFIG))
    assert cfg.gas_name == "Air"
    assert cfg.model is EosModel.GERG2008
    assert cfg.units.pressure is Pressure.PSI
    assert cfg.units.stp_60f
    assert cfg.temperature.to("K").magnitude == pytest.approx(288.71, abs=0.01)
    assert cfg.wheel_diameter.check("[length]")

def test_missing_pressure_is_an_error(tmp_path):
    p = tmp_path / "s.yaml"
    p.write_text("temperature: {value: 300, unit: K}\n")
    with pytest.raises(KeyError):
        load_session(str(p))

def test_composition_and_units_override(tmp_path):
    p = tmp_path / "s.yaml"
    p.write_text(
        "pressure: {value: 5, unit: bar}\n"
        "temperature: {value: 20, unit: degC}\n"
        "composition: {methane: 0.9, ethane: 0.1}\n"
        "model: aga8\n"
        "units: {flow: Nm3/hr}\n"
    )
    cfg = load_session(str(p))
    assert cfg.composition == {"methane": 0.9, "ethane": 0.1}
    assert cfg.model is EosModel.AGA8
    assert cfg.units.flow is Flow.NM3_HR
    assert cfg.pressure.magnitude == pytest.approx(500.0)

def test_state_table_marks_unset_points(session):
    df = state_table(session)
    assert list(df.columns) == ["Current", "Inlet", "Outlet"]
    assert (df["Inlet"] == NA).all()
    assert "Pressure [kPa]" in df.index
    assert session_process_table(session) is None

def test_process_table_flags(fake_factory, session):
    session.set_inlet()
    session.set_pressure(200.0)
    session.set_temperature(340.0)
    session.set_outlet()
    df = process_table(session.process(), session.units)
    assert df.iloc[0]["value"] == "Compression"
    flagged = df[df["flag"] != ""]["quantity"].tolist()
    assert "Isentropic efficiency" in flagged

def test_write_results_csvs(compression, tmp_path):
    states = state_table(compression)
    process = session_process_table(compression)
    s_path, p_path = write_results_csvs(states, process, tmp_path, "t1")
    assert Path(s_path).exists() and Path(p_path).exists()
    assert "Outlet" in Path(s_path).read_text()

def test_gibbs_label_follows_pressure_and_temperature_units(session):
    assert "Gibbs energy [J/mol]" in state_table(session).index
    session.set_unit("pressure", "PSI")
    session.set_unit("temperature", "F")
    assert "Gibbs energy [J/mol per PSI, F]" in state_table(session).index
