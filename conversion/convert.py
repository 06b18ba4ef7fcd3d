"""
Base <-> display conversion for the fixed-factor domains.

Base units: kPa, K, mol/l, J/mol, J/(mol-K), m/s, K/kPa.
Molar-basis domains (density, energy, entropy) need the molar mass in g/mol.
"""
from __future__ import annotations

from common.constants import (
    KPA_TO_BAR, KPA_TO_PSI, KG_TO_LBM, M3_TO_FT3, M_TO_FT, KJKG_TO_BTULBM,
)
from conversion.display import Pressure, Temperature, Density, Energy, Entropy, Speed, JTCoeff

_PRESSURE = {
    Pressure.KPA: 1.0,
    Pressure.BAR: KPA_TO_BAR,
    Pressure.PSI: KPA_TO_PSI,
}

_SPEED = {
    Speed.M_S: 1.0,
    Speed.FT_S: M_TO_FT,
}

_JT = {
    JTCoeff.K_KPA: 1.0,
    JTCoeff.K_BAR: KPA_TO_BAR,
    JTCoeff.R_PSI: 9.0 / 5.0 / KPA_TO_PSI,
}

# temperature-difference scale per unit (K and C share a degree size)
_DEGREE = {
    Temperature.K: 1.0,
    Temperature.C: 1.0,
    Temperature.F: 9.0 / 5.0,
    Temperature.R: 9.0 / 5.0,
}


# ---------------- pressure ----------------

def pressure_to_display(p: float, unit: Pressure) -> float:
    return p * _PRESSURE[unit]

def pressure_to_base(p: float, unit: Pressure) -> float:
    return p / _PRESSURE[unit]


# ---------------- temperature ----------------

def temperature_to_display(t: float, unit: Temperature) -> float:
    if unit is Temperature.K:
        return t
    if unit is Temperature.C:
        return t - 273.15
    if unit is Temperature.F:
        return (t - 273.15) * 9.0 / 5.0 + 32.0
    return t * 9.0 / 5.0

def temperature_to_base(t: float, unit: Temperature) -> float:
    if unit is Temperature.K:
        return t
    if unit is Temperature.C:
        return t + 273.15
    if unit is Temperature.F:
        return (t - 32.0) * 5.0 / 9.0 + 273.15
    return t * 5.0 / 9.0


# ---------------- density ----------------

def _density_factor(unit: Density, mm: float) -> float:
    if unit is Density.MOL_L:
        return 1.0
    if unit is Density.KG_M3:
        return mm
    return mm * KG_TO_LBM / M3_TO_FT3

def density_to_display(d: float, unit: Density, mm: float) -> float:
    return d * _density_factor(unit, mm)

def density_to_base(d: float, unit: Density, mm: float) -> float:
    return d / _density_factor(unit, mm)


# ---------------- energy / entropy ----------------

def _energy_factor(unit: Energy, mm: float) -> float:
    if unit is Energy.J_MOL:
        return 1.0
    if unit is Energy.KJ_KG:
        return 1.0 / mm
    return KJKG_TO_BTULBM / mm

def energy_to_display(e: float, unit: Energy, mm: float) -> float:
    return e * _energy_factor(unit, mm)

def energy_to_base(e: float, unit: Energy, mm: float) -> float:
    return e / _energy_factor(unit, mm)

def _entropy_factor(unit: Entropy, mm: float) -> float:
    if unit is Entropy.J_MOL_K:
        return 1.0
    if unit is Entropy.KJ_KG_K:
        return 1.0 / mm
    return KJKG_TO_BTULBM * 5.0 / 9.0 / mm

def entropy_to_display(s: float, unit: Entropy, mm: float) -> float:
    return s * _entropy_factor(unit, mm)

def entropy_to_base(s: float, unit: Entropy, mm: float) -> float:
    return s / _entropy_factor(unit, mm)


# ---------------- speed / JT ----------------

def speed_to_display(w: float, unit: Speed) -> float:
    return w * _SPEED[unit]

def speed_to_base(w: float, unit: Speed) -> float:
    return w / _SPEED[unit]

def jt_to_display(jt: float, unit: JTCoeff) -> float:
    return jt * _JT[unit]

def jt_to_base(jt: float, unit: JTCoeff) -> float:
    return jt / _JT[unit]


# ---------------- gibbs energy ----------------

def gibbs_to_display(g: float, p_unit: Pressure, t_unit: Temperature) -> float:
    """Rescaled per pressure unit and per temperature degree; no mass basis."""
    return g / _PRESSURE[p_unit] * _DEGREE[t_unit]

def gibbs_to_base(g: float, p_unit: Pressure, t_unit: Temperature) -> float:
    return g * _PRESSURE[p_unit] / _DEGREE[t_unit]
