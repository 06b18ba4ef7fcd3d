from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

from common.models import Composition, EosModel, GasStateRecord


class EosOracle(ABC):
    """
    One equation-of-state evaluation point.

    Call shape is the same for every model: set composition, pressure (kPa)
    and temperature (K), then compute_density() followed by
    compute_properties(). record() snapshots the result in base units.
    """
    model: EosModel

    def __init__(self):
        self.comp: Composition = {}

    def set_composition(self, comp: Composition) -> None:
        self.comp = dict(comp)

    @property
    @abstractmethod
    def pressure(self) -> float: ...

    @pressure.setter
    @abstractmethod
    def pressure(self, value: float) -> None: ...

    @property
    @abstractmethod
    def temperature(self) -> float: ...

    @temperature.setter
    @abstractmethod
    def temperature(self, value: float) -> None: ...

    @abstractmethod
    def compute_density(self) -> None: ...

    @abstractmethod
    def compute_properties(self) -> None: ...

    @abstractmethod
    def record(self) -> GasStateRecord: ...


OracleFactory = Callable[[EosModel], EosOracle]


def pyaga8_factory(model: EosModel) -> EosOracle:
    """Default factory: AGA8-DETAIL and GERG-2008 from the pyaga8 bindings."""
    from common.aga8_props import Aga8Detail, Gerg2008
    return Aga8Detail() if model is EosModel.AGA8 else Gerg2008()


def evaluate(factory: OracleFactory, model: EosModel, comp: Composition,
             p_kpa: float, t_k: float) -> GasStateRecord:
    """Throwaway evaluation at (p, t); nothing outside the new oracle is touched."""
    oracle = factory(model)
    oracle.set_composition(comp)
    oracle.pressure = p_kpa
    oracle.temperature = t_k
    oracle.compute_density()
    oracle.compute_properties()
    return oracle.record()
