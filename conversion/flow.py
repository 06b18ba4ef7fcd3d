"""
Flow-rate conversion. Base is mass flow in kg/s.

Volumetric units (Nm3/hr, scfm, scfh) go through the mass density of the gas
at the reference condition, taken from a throwaway EOS evaluation so the live
process points are never touched.
"""
from __future__ import annotations
from dataclasses import dataclass

from common.constants import P_STD, T_NORMAL, T_STD_60F, T_STD_70F, KG_TO_LBM, M3_TO_FT3
from common.logging_utils import trace_calls
from common.models import Composition, EosModel
from common.props import OracleFactory, evaluate
from conversion.display import Flow


_MASS = {
    Flow.KG_S: 1.0,
    Flow.KG_MIN: 60.0,
    Flow.KG_HR: 3600.0,
    Flow.LBM_S: KG_TO_LBM,
    Flow.LBM_MIN: KG_TO_LBM * 60.0,
    Flow.LBM_HR: KG_TO_LBM * 3600.0,
}

# m3/s -> display volume rate
_VOLUME = {
    Flow.NM3_HR: 3600.0,
    Flow.SCFM: M3_TO_FT3 * 60.0,
    Flow.SCFH: M3_TO_FT3 * 3600.0,
}


@dataclass(frozen=True)
class FlowReference:
    """Gas and EOS choice the volumetric units are defined against."""
    factory: OracleFactory
    model: EosModel
    comp: Composition
    stp_60f: bool = True


def is_volumetric(unit: Flow) -> bool:
    return unit in _VOLUME


def reference_temperature(unit: Flow, stp_60f: bool = True) -> float:
    if unit is Flow.NM3_HR:
        return T_NORMAL
    return T_STD_60F if stp_60f else T_STD_70F


@trace_calls(values=True)
def reference_density(ref: FlowReference, t_ref: float) -> float:
    """Mass density (kg/m3) at 101.325 kPa and t_ref."""
    rec = evaluate(ref.factory, ref.model, ref.comp, P_STD, t_ref)
    rho = rec.d * rec.mm
    if rho <= 0.0:
        raise ValueError(f"non-positive reference density {rho!r} kg/m3 at {t_ref} K")
    return rho


def _volume_factor(unit: Flow, ref: FlowReference | None) -> float:
    if ref is None:
        raise ValueError(f"{unit.value} needs a gas reference (composition and EOS model)")
    rho = reference_density(ref, reference_temperature(unit, ref.stp_60f))
    return _VOLUME[unit] / rho


def flow_to_display(m_dot: float, unit: Flow, ref: FlowReference | None = None) -> float:
    if unit in _MASS:
        return m_dot * _MASS[unit]
    return m_dot * _volume_factor(unit, ref)


def flow_to_base(value: float, unit: Flow, ref: FlowReference | None = None) -> float:
    if unit in _MASS:
        return value / _MASS[unit]
    return value / _volume_factor(unit, ref)
