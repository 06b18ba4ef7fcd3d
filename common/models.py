from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Mapping

from common.constants import COMPONENTS, GAS_LIBRARY

Composition = Dict[str, float]


class ProcessPoint(Enum):
    CURRENT = "current"
    INLET = "inlet"
    OUTLET = "outlet"


class EosModel(Enum):
    AGA8 = "AGA8"
    GERG2008 = "GERG-2008"

    def other(self) -> "EosModel":
        return EosModel.GERG2008 if self is EosModel.AGA8 else EosModel.AGA8


def make_composition(fractions: Mapping[str, float]) -> Composition:
    comp = {}
    for name, x in fractions.items():
        if name not in COMPONENTS:
            raise ValueError(f"unknown component '{name}'")
        comp[name] = float(x)
    return comp


def library_composition(name: str) -> Composition:
    if name not in GAS_LIBRARY:
        raise KeyError(f"unknown gas '{name}'; choose from {sorted(GAS_LIBRARY)}")
    return dict(GAS_LIBRARY[name])


@dataclass(frozen=True)
class GasStateRecord:
    p: float = 0.0       # kPa
    t: float = 0.0       # K
    d: float = 0.0       # mol/l
    mm: float = 0.0      # g/mol
    u: float = 0.0       # J/mol
    h: float = 0.0       # J/mol
    s: float = 0.0       # J/(mol-K)
    cv: float = 0.0      # J/(mol-K)
    cp: float = 0.0      # J/(mol-K)
    kappa: float = 0.0   # -
    z: float = 0.0       # -
    w: float = 0.0       # m/s
    g: float = 0.0       # J/mol
    jt: float = 0.0      # K/kPa
    comp: Composition = field(default_factory=dict, compare=False)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name != "comp")
