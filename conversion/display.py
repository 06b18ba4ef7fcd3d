from __future__ import annotations
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Type

from common.errors import UnknownUnitError


class Pressure(Enum):
    KPA = "kPa"
    BAR = "Bar"
    PSI = "PSI"


class Temperature(Enum):
    K = "K"
    C = "C"
    F = "F"
    R = "R"


class Density(Enum):
    MOL_L = "mol/l"
    KG_M3 = "kg/m3"
    LBM_FT3 = "lbm/ft3"


class Energy(Enum):
    J_MOL = "J/mol"
    KJ_KG = "kJ/kg"
    BTU_LBM = "BTU/lbm"


class Entropy(Enum):
    J_MOL_K = "J/(mol-K)"
    KJ_KG_K = "kJ/(kg-K)"
    BTU_LBM_R = "BTU/(lbm-R)"


class Speed(Enum):
    M_S = "m/s"
    FT_S = "ft/s"


class JTCoeff(Enum):
    K_KPA = "K/kPa"
    K_BAR = "K/Bar"
    R_PSI = "R/PSI"


class Flow(Enum):
    KG_S = "kg/s"
    KG_MIN = "kg/min"
    KG_HR = "kg/hr"
    LBM_S = "lbm/s"
    LBM_MIN = "lbm/min"
    LBM_HR = "lbm/hr"
    NM3_HR = "Nm3/hr"
    SCFM = "scfm"
    SCFH = "scfh"


@dataclass(frozen=True)
class Units:
    """Active display units. Base units are the defaults."""
    pressure: Pressure = Pressure.KPA
    temperature: Temperature = Temperature.K
    density: Density = Density.MOL_L
    energy: Energy = Energy.J_MOL
    entropy: Entropy = Entropy.J_MOL_K
    speed: Speed = Speed.M_S
    jt_coeff: JTCoeff = JTCoeff.K_KPA
    flow: Flow = Flow.KG_S
    stp_60f: bool = True

    def with_unit(self, domain: str, label: str) -> "Units":
        enum_cls = DOMAINS.get(domain)
        if enum_cls is None:
            raise UnknownUnitError(f"unknown unit domain '{domain}'; choose from {sorted(DOMAINS)}")
        return replace(self, **{domain: parse_unit(enum_cls, label)})

    def labels(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name).value for f in fields(self) if f.name in DOMAINS}


DOMAINS: Dict[str, Type[Enum]] = {
    "pressure": Pressure,
    "temperature": Temperature,
    "density": Density,
    "energy": Energy,
    "entropy": Entropy,
    "speed": Speed,
    "jt_coeff": JTCoeff,
    "flow": Flow,
}


def parse_unit(enum_cls: Type[Enum], label: str) -> Enum:
    """Look a unit up by its display label, case-insensitively."""
    for member in enum_cls:
        if member.value.lower() == str(label).strip().lower():
            return member
    raise UnknownUnitError(
        f"'{label}' is not a {enum_cls.__name__} unit; choose from {[m.value for m in enum_cls]}"
    )
