"""
Three process points (current, inlet, outlet), each evaluated by both EOS
models. Derived fields are only read through a ProcessView, and a view can
only be taken after a full recalculation pass.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, Tuple
import logging

from common.errors import ProcessUnavailableError, StaleStateError
from common.logging_utils import trace_calls
from common.models import Composition, EosModel, GasStateRecord, ProcessPoint, make_composition
from common.props import EosOracle, OracleFactory, evaluate

log = logging.getLogger(__name__)

_Key = Tuple[EosModel, ProcessPoint]


@dataclass(frozen=True)
class ProcessView:
    """Immutable snapshot of all six records right after recalculation."""
    records: Dict[_Key, GasStateRecord]
    defined: FrozenSet[ProcessPoint]
    model: EosModel
    factory: OracleFactory
    revision: int = 0

    def record(self, point: ProcessPoint, model: EosModel | None = None) -> GasStateRecord:
        return self.records[(model or self.model, point)]

    @property
    def current(self) -> GasStateRecord:
        return self.record(ProcessPoint.CURRENT)

    def is_defined(self, point: ProcessPoint) -> bool:
        return point in self.defined

    @property
    def has_process(self) -> bool:
        return ProcessPoint.INLET in self.defined and ProcessPoint.OUTLET in self.defined

    def endpoints(self) -> tuple[GasStateRecord, GasStateRecord]:
        """(inlet, outlet) of the active model."""
        missing = [p.value for p in (ProcessPoint.INLET, ProcessPoint.OUTLET) if p not in self.defined]
        if missing:
            raise ProcessUnavailableError(f"process not available: {', '.join(missing)} not set")
        return self.record(ProcessPoint.INLET), self.record(ProcessPoint.OUTLET)

    def with_model(self, model: EosModel) -> "ProcessView":
        return replace(self, model=model)

    def probe(self, comp: Composition, p_kpa: float, t_k: float) -> GasStateRecord:
        """Side evaluation with the active model; live records are not involved."""
        return evaluate(self.factory, self.model, comp, p_kpa, t_k)


class GasStateMirror:
    def __init__(self, factory: OracleFactory, comp: Composition,
                 p_kpa: float, t_k: float, model: EosModel = EosModel.GERG2008):
        self._factory = factory
        self._oracles: Dict[_Key, EosOracle] = {
            (m, pt): factory(m) for m in EosModel for pt in ProcessPoint
        }
        self.model = model
        self._defined = {ProcessPoint.CURRENT}
        self._revision = 0
        self._stale = True
        comp = make_composition(comp)
        for o in self._oracles.values():
            o.set_composition(comp)
            o.pressure = p_kpa
            o.temperature = t_k
        self.recalculate()

    # ---------------- low-level mutation (leaves the mirror stale) ----------------

    def set_composition(self, comp: Composition, *points: ProcessPoint) -> None:
        self._stale = True
        for (m, pt), o in self._oracles.items():
            if not points or pt in points:
                o.set_composition(comp)

    def set_pressure(self, point: ProcessPoint, p_kpa: float) -> None:
        self._stale = True
        for m in EosModel:
            self._oracles[(m, point)].pressure = p_kpa

    def set_temperature(self, point: ProcessPoint, t_k: float) -> None:
        self._stale = True
        for m in EosModel:
            self._oracles[(m, point)].temperature = t_k

    def set_model(self, model: EosModel) -> None:
        # both mirrors are always live, so no recalculation is owed
        self.model = model

    # ---------------- point lifecycle ----------------

    def define(self, point: ProcessPoint) -> None:
        self._defined.add(point)

    def clear(self) -> None:
        self._defined.discard(ProcessPoint.INLET)
        self._defined.discard(ProcessPoint.OUTLET)

    def is_defined(self, point: ProcessPoint) -> bool:
        return point in self._defined

    @property
    def stale(self) -> bool:
        return self._stale

    def composition(self, point: ProcessPoint = ProcessPoint.CURRENT) -> Composition:
        return dict(self._oracles[(self.model, point)].comp)

    # ---------------- recalculation ----------------

    @trace_calls()
    def recalculate(self) -> ProcessView:
        """Density then properties on all six states, unconditionally."""
        for (m, pt), o in self._oracles.items():
            o.compute_density()
            o.compute_properties()
        self._stale = False
        self._revision += 1
        log.debug(f"recalculated {len(self._oracles)} states (rev {self._revision})",
                  extra={"op": "recalculate"})
        return self.view()

    def view(self) -> ProcessView:
        if self._stale:
            raise StaleStateError("state changed since the last recalculation")
        return ProcessView(
            records={k: o.record() for k, o in self._oracles.items()},
            defined=frozenset(self._defined),
            model=self.model,
            factory=self._factory,
            revision=self._revision,
        )

    def set_gas(self, comp: Composition) -> ProcessView:
        """New composition on every point and model, then recalculate."""
        self.set_composition(make_composition(comp))
        return self.recalculate()
