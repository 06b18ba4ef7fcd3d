from __future__ import annotations

import pyaga8

from common.models import Composition, EosModel, GasStateRecord
from common.props import EosOracle

# GasStateRecord field -> attribute on the pyaga8 state object
_FIELDS = {
    "p": "p", "t": "t", "d": "d", "mm": "mm",
    "u": "u", "h": "h", "s": "s", "cv": "cv", "cp": "cp",
    "kappa": "kappa", "z": "z", "w": "w", "g": "g", "jt": "jt",
}


class _Pyaga8Oracle(EosOracle):
    """pyaga8-backed state in kPa, K, mol/l, J/mol."""
    def __init__(self, engine):
        super().__init__()
        self._eng = engine

    def set_composition(self, comp: Composition) -> None:
        super().set_composition(comp)
        self._eng.set_composition(pyaga8.Composition(**self.comp))

    @property
    def pressure(self) -> float:
        return self._eng.p

    @pressure.setter
    def pressure(self, value: float) -> None:
        self._eng.p = float(value)

    @property
    def temperature(self) -> float:
        return self._eng.t

    @temperature.setter
    def temperature(self, value: float) -> None:
        self._eng.t = float(value)

    def compute_properties(self) -> None:
        self._eng.calc_properties()

    def record(self) -> GasStateRecord:
        vals = {f: float(getattr(self._eng, attr)) for f, attr in _FIELDS.items()}
        return GasStateRecord(**vals, comp=dict(self.comp))


class Aga8Detail(_Pyaga8Oracle):
    model = EosModel.AGA8

    def __init__(self):
        super().__init__(pyaga8.Detail())

    def compute_density(self) -> None:
        self._eng.calc_density()


class Gerg2008(_Pyaga8Oracle):
    model = EosModel.GERG2008

    def __init__(self):
        super().__init__(pyaga8.Gerg2008())

    def compute_density(self) -> None:
        # iflag 0: strict pressure solve
        self._eng.calc_density(0)
