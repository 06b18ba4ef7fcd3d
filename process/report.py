from __future__ import annotations
from typing import Dict, List
import math

import pandas as pd

from common.models import ProcessPoint
from common.results import ProcessResult
from conversion.display import Pressure, Temperature, Units
from process.session import Session, display_process

NA = "N/A"

# row name -> (label, units attribute or fixed label)
_STATE_ROWS = {
    "pressure":        ("Pressure", "pressure"),
    "temperature":     ("Temperature", "temperature"),
    "density":         ("Density", "density"),
    "molar_mass":      ("Molar mass", "g/mol"),
    "internal_energy": ("Internal energy", "energy"),
    "enthalpy":        ("Enthalpy", "energy"),
    "entropy":         ("Entropy", "entropy"),
    "cp":              ("Cp", "entropy"),
    "cv":              ("Cv", "entropy"),
    "kappa":           ("Cp/Cv", "-"),
    "z":               ("Z", "-"),
    "speed_of_sound":  ("Speed of sound", "speed"),
    "gibbs_energy":    ("Gibbs energy", "gibbs"),
    "jt_coeff":        ("Joule-Thomson", "jt_coeff"),
}

_PROCESS_ROWS = {
    "pressure_ratio":             ("Pressure ratio", "-"),
    "density_ratio":              ("Density ratio", "-"),
    "temperature_ratio":          ("Temperature ratio", "-"),
    "temperature_change":         ("Temperature change", "temperature"),
    "enthalpy_change":            ("Enthalpy change", "energy"),
    "entropy_change":             ("Entropy change", "entropy"),
    "ave_cp_cv":                  ("Average Cp/Cv", "-"),
    "isentropic_temperature":     ("Isentropic temperature", "temperature"),
    "isentropic_enthalpy":        ("Isentropic enthalpy", "energy"),
    "isentropic_enthalpy_change": ("Isentropic enthalpy change", "energy"),
    "isentropic_efficiency":      ("Isentropic efficiency", "-"),
    "polytropic_exponent":        ("Polytropic exponent", "-"),
    "polytropic_efficiency":      ("Polytropic efficiency", "-"),
    "work":                       ("Work", "kW"),
}


def _gibbs_label(units: Units) -> str:
    # rescaled per pressure unit and temperature degree, see convert.gibbs_to_display
    p, t = units.pressure, units.temperature
    if p is Pressure.KPA and t in (Temperature.K, Temperature.C):
        return "J/mol"
    return f"J/mol per {p.value}, {t.value}"


def _unit_label(unit: str, units: Units) -> str:
    if unit == "gibbs":
        return _gibbs_label(units)
    labels = units.labels()
    return labels.get(unit, unit)


def _fmt(x: float) -> str:
    if isinstance(x, float) and not math.isfinite(x):
        return "NaN" if math.isnan(x) else ("inf" if x > 0 else "-inf")
    return f"{x:.6g}"


def state_table(session: Session) -> pd.DataFrame:
    """Property rows x (Current, Inlet, Outlet); undefined points read N/A."""
    units = session.units
    view = session.view
    columns: Dict[str, List[str]] = {}
    for point in ProcessPoint:
        if view.is_defined(point):
            props = session.properties(point)
            columns[point.value.capitalize()] = [_fmt(props[k]) for k in _STATE_ROWS]
        else:
            columns[point.value.capitalize()] = [NA] * len(_STATE_ROWS)
    index = [f"{label} [{_unit_label(unit, units)}]" for label, unit in _STATE_ROWS.values()]
    df = pd.DataFrame(columns, index=index)
    df.index.name = "property"
    return df


def process_table(res: ProcessResult, units: Units) -> pd.DataFrame:
    values = display_process(res, units)
    flags = {
        "isentropic_efficiency": res.isentropic_efficiency.out_of_range,
        "polytropic_efficiency": res.polytropic_efficiency.out_of_range,
    }
    rows = []
    for key, (label, unit) in _PROCESS_ROWS.items():
        if key == "work" and res.work is None:
            continue
        rows.append({
            "quantity": label,
            "value": _fmt(values[key]),
            "unit": _unit_label(unit, units),
            "flag": "out of range" if flags.get(key) else "",
        })
    rows.insert(0, {"quantity": "Process", "value": res.mode.value, "unit": "", "flag": ""})
    return pd.DataFrame(rows, columns=["quantity", "value", "unit", "flag"])


def session_process_table(session: Session) -> pd.DataFrame | None:
    if not session.view.has_process:
        return None
    return process_table(session.process(), session.units)
