from __future__ import annotations
from typing import Any, Dict
import yaml

from common.units import Q_
from common.models import EosModel, make_composition
from conversion.display import Units
from process.session import SessionConfig


def _q(node: Any) -> Q_:
    if isinstance(node, dict) and "value" in node and "unit" in node:
        return Q_(node["value"], str(node["unit"]))
    raise ValueError(f"Invalid quantity format: {node!r}")

def _get(d: Dict[str, Any] | None, key: str, default=None):
    return d.get(key, default) if isinstance(d, dict) else default

def _model(label: str) -> EosModel:
    for m in EosModel:
        if m.value.lower() == str(label).strip().lower():
            return m
    raise ValueError(f"unknown EOS model '{label}'; choose from {[m.value for m in EosModel]}")

def _units(node: Dict[str, Any] | None, stp_60f: bool) -> Units:
    units = Units(stp_60f=stp_60f)
    for domain, label in (node or {}).items():
        units = units.with_unit(domain, str(label))
    return units

def load_session(path: str) -> SessionConfig:
    with open(path, "r", encoding="utf-8") as fh:
        doc = yaml.safe_load(fh) or {}

    for k in ("pressure", "temperature"):
        if k not in doc:
            raise KeyError(f"{path}: '{k}' is required")

    cfg: Dict[str, Any] = {
        "pressure":    _q(doc["pressure"]).to("kPa"),
        "temperature": _q(doc["temperature"]).to("K"),
        "units":       _units(_get(doc, "units"), bool(_get(doc, "stp_60f", True))),
    }
    if "gas" in doc:         cfg["gas_name"]    = str(doc["gas"])
    if "composition" in doc: cfg["composition"] = make_composition(doc["composition"] or {})
    if "model" in doc:       cfg["model"]       = _model(doc["model"])
    if "mass_flow" in doc:   cfg["mass_flow"]   = _q(doc["mass_flow"]).to("kg/s")

    machine = _get(doc, "machine") or {}
    if _get(machine, "input_speed"):    cfg["input_speed"]    = _q(machine["input_speed"]).to("rpm")
    if "gear_ratio" in machine:         cfg["gear_ratio"]     = float(machine["gear_ratio"])
    if _get(machine, "wheel_diameter"): cfg["wheel_diameter"] = _q(machine["wheel_diameter"]).to("m")

    return SessionConfig(**cfg)
