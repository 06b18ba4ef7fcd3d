"""
Session: the single mutable state bundle behind the calculator.

Units, gas, the six mirrored EOS states, the active model and the machine
inputs live here. Every mutator that touches pressure, temperature or
composition recalculates before returning and hands back the fresh view.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Callable, Dict
import logging

from common.errors import InvalidInputError, ProcessUnavailableError
from common.models import (
    Composition, EosModel, GasStateRecord, ProcessPoint, library_composition, make_composition,
)
from common.props import OracleFactory, pyaga8_factory
from common.results import MachineResult, ProcessResult
from common.units import Q_
from conversion import convert
from conversion.display import Units
from conversion.flow import FlowReference, flow_to_base, flow_to_display
from process import calculations as calc
from process.mirror import GasStateMirror, ProcessView

log = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    gas_name: str = "Air"
    composition: Composition | None = None     # overrides gas_name when given
    pressure: Q_ = field(default_factory=lambda: Q_(14.696, "psi"))
    temperature: Q_ = field(default_factory=lambda: Q_(60.0, "degF"))
    units: Units = field(default_factory=Units)
    model: EosModel = EosModel.GERG2008
    mass_flow: Q_ = field(default_factory=lambda: Q_(0.0, "kg/s"))
    input_speed: Q_ = field(default_factory=lambda: Q_(0.0, "rpm"))
    gear_ratio: float = 1.0
    wheel_diameter: Q_ = field(default_factory=lambda: Q_(0.0, "m"))


def parse_scalar(text: str) -> float:
    try:
        return float(str(text).strip())
    except ValueError:
        raise InvalidInputError(f"not a number: {text!r}") from None


class Session:
    def __init__(self, config: SessionConfig | None = None, factory: OracleFactory = pyaga8_factory):
        cfg = config or SessionConfig()
        self.units: Units = cfg.units
        if cfg.composition is not None:
            comp, self.gas_name = make_composition(cfg.composition), "Custom"
        else:
            comp, self.gas_name = library_composition(cfg.gas_name), cfg.gas_name
        self.mirror = GasStateMirror(
            factory, comp,
            p_kpa=cfg.pressure.to("kPa").magnitude,
            t_k=cfg.temperature.to("K").magnitude,
            model=cfg.model,
        )
        self.mass_flow = cfg.mass_flow.to("kg/s").magnitude
        self.input_speed = cfg.input_speed.to("rpm").magnitude
        self.gear_ratio = float(cfg.gear_ratio)
        self.wheel_diameter = cfg.wheel_diameter.to("m").magnitude
        self._factory = factory

    @property
    def view(self) -> ProcessView:
        return self.mirror.view()

    @property
    def model(self) -> EosModel:
        return self.mirror.model

    # ---------------- gas ----------------

    def set_gas(self, comp: Composition, name: str = "Custom") -> ProcessView:
        comp = make_composition(comp)
        self.gas_name = name
        log.info(f"gas set to {name}: {comp}", extra={"op": "set_gas"})
        return self.mirror.set_gas(comp)

    def set_gas_by_name(self, name: str) -> ProcessView:
        return self.set_gas(library_composition(name), name)

    # ---------------- current point ----------------

    def set_pressure(self, value: float) -> ProcessView:
        """Current-point pressure in the active display unit."""
        p = convert.pressure_to_base(value, self.units.pressure)
        self.mirror.set_pressure(ProcessPoint.CURRENT, p)
        log.info(f"pressure {value} {self.units.pressure.value} -> {p:.6g} kPa",
                 extra={"point": "current", "op": "set_pressure"})
        return self.mirror.recalculate()

    def set_temperature(self, value: float) -> ProcessView:
        """Current-point temperature in the active display unit."""
        t = convert.temperature_to_base(value, self.units.temperature)
        self.mirror.set_temperature(ProcessPoint.CURRENT, t)
        log.info(f"temperature {value} {self.units.temperature.value} -> {t:.6g} K",
                 extra={"point": "current", "op": "set_temperature"})
        return self.mirror.recalculate()

    def flow_reference(self) -> FlowReference:
        return FlowReference(
            factory=self._factory,
            model=self.mirror.model,
            comp=self.mirror.composition(ProcessPoint.CURRENT),
            stp_60f=self.units.stp_60f,
        )

    def set_flow(self, value: float) -> float:
        """Mass flow entered in the active flow unit; returns the base kg/s value."""
        self.mass_flow = flow_to_base(value, self.units.flow, self.flow_reference())
        log.info(f"flow {value} {self.units.flow.value} -> {self.mass_flow:.6g} kg/s",
                 extra={"op": "set_flow"})
        return self.mass_flow

    # ---------------- inlet / outlet ----------------

    def _snapshot(self, point: ProcessPoint) -> ProcessView:
        cur = self.view.current
        # round-trip through the displayed values, as the operator sees them
        p = convert.pressure_to_base(convert.pressure_to_display(cur.p, self.units.pressure),
                                     self.units.pressure)
        t = convert.temperature_to_base(convert.temperature_to_display(cur.t, self.units.temperature),
                                        self.units.temperature)
        self.mirror.set_composition(self.mirror.composition(ProcessPoint.CURRENT), point)
        self.mirror.set_pressure(point, p)
        self.mirror.set_temperature(point, t)
        self.mirror.define(point)
        log.info(f"{point.value} set at {p:.6g} kPa, {t:.6g} K",
                 extra={"point": point.value, "op": "set_condition"})
        return self.mirror.recalculate()

    def set_inlet(self) -> ProcessView:
        return self._snapshot(ProcessPoint.INLET)

    def set_outlet(self) -> ProcessView:
        return self._snapshot(ProcessPoint.OUTLET)

    def clear(self) -> ProcessView:
        self.mirror.clear()
        log.info("inlet and outlet cleared", extra={"op": "clear"})
        return self.view

    # ---------------- model / units ----------------

    def set_model(self, model: EosModel) -> ProcessView:
        self.mirror.set_model(model)
        log.info(f"EOS model {model.value}", extra={"op": "set_model"})
        return self.mirror.recalculate()

    def switch_model(self) -> ProcessView:
        return self.set_model(self.mirror.model.other())

    def set_unit(self, domain: str, label: str) -> Units:
        self.units = self.units.with_unit(domain, label)
        log.info(f"{domain} unit -> {label}", extra={"op": "set_unit"})
        return self.units

    def set_stp_60f(self, flag: bool) -> Units:
        self.units = replace(self.units, stp_60f=bool(flag))
        return self.units

    # ---------------- machine ----------------

    def set_input_speed(self, rpm: float) -> None:
        self.input_speed = float(rpm)

    def set_gear_ratio(self, ratio: float) -> None:
        self.gear_ratio = float(ratio)

    def set_wheel_diameter(self, metres: float) -> None:
        self.wheel_diameter = float(metres)

    def _setters(self) -> Dict[str, Callable[[float], object]]:
        return {
            "pressure": self.set_pressure,
            "temperature": self.set_temperature,
            "flow": self.set_flow,
            "input_speed": self.set_input_speed,
            "gear_ratio": self.set_gear_ratio,
            "wheel_diameter": self.set_wheel_diameter,
        }

    def apply_input(self, field_name: str, text: str):
        """Parse first, mutate only on success."""
        setters = self._setters()
        if field_name not in setters:
            raise KeyError(f"unknown input field '{field_name}'; choose from {sorted(setters)}")
        try:
            value = parse_scalar(text)
        except InvalidInputError:
            log.warning(f"rejected input {text!r} for {field_name}", extra={"op": "apply_input"})
            raise
        return setters[field_name](value)

    # ---------------- read accessors (display units) ----------------

    def record(self, point: ProcessPoint = ProcessPoint.CURRENT) -> GasStateRecord:
        view = self.view
        if not view.is_defined(point):
            raise ProcessUnavailableError(f"{point.value} state not set")
        return view.record(point)

    def properties(self, point: ProcessPoint = ProcessPoint.CURRENT) -> Dict[str, float]:
        return display_record(self.record(point), self.units)

    def flow(self) -> float:
        return flow_to_display(self.mass_flow, self.units.flow, self.flow_reference())

    def process(self) -> ProcessResult:
        return calc.run_calculations(self.view, self.units.temperature, Q_(self.mass_flow, "kg/s"))

    def process_display(self) -> Dict[str, float]:
        return display_process(self.process(), self.units)

    def machine(self) -> MachineResult:
        return calc.machine_data(self.view, Q_(self.input_speed, "rpm"), self.gear_ratio,
                                 Q_(self.wheel_diameter, "m"))


# ---------------- display mapping ----------------

def display_record(rec: GasStateRecord, units: Units) -> Dict[str, float]:
    mm = rec.mm
    return {
        "pressure": convert.pressure_to_display(rec.p, units.pressure),
        "temperature": convert.temperature_to_display(rec.t, units.temperature),
        "density": convert.density_to_display(rec.d, units.density, mm),
        "molar_mass": mm,
        "internal_energy": convert.energy_to_display(rec.u, units.energy, mm),
        "enthalpy": convert.energy_to_display(rec.h, units.energy, mm),
        "entropy": convert.entropy_to_display(rec.s, units.entropy, mm),
        "cp": convert.entropy_to_display(rec.cp, units.entropy, mm),
        "cv": convert.entropy_to_display(rec.cv, units.entropy, mm),
        "kappa": rec.kappa,
        "z": rec.z,
        "speed_of_sound": convert.speed_to_display(rec.w, units.speed),
        "gibbs_energy": convert.gibbs_to_display(rec.g, units.pressure, units.temperature),
        "jt_coeff": convert.jt_to_display(rec.jt, units.jt_coeff),
    }


def display_process(res: ProcessResult, units: Units) -> Dict[str, float]:
    mm = res.molar_mass
    return {
        "pressure_ratio": res.pressure_ratio,
        "density_ratio": res.density_ratio,
        "temperature_ratio": res.temperature_ratio,
        "temperature_change": res.temperature_change,
        "enthalpy_change": convert.energy_to_display(res.enthalpy_change, units.energy, mm),
        "entropy_change": convert.entropy_to_display(res.entropy_change, units.entropy, mm),
        "ave_cp_cv": res.ave_cp_cv,
        "isentropic_temperature": convert.temperature_to_display(res.isentropic_temperature,
                                                                 units.temperature),
        "isentropic_enthalpy": convert.energy_to_display(res.isentropic_enthalpy, units.energy, mm),
        "isentropic_enthalpy_change": convert.energy_to_display(res.isentropic_enthalpy_change,
                                                                units.energy, mm),
        "isentropic_efficiency": res.isentropic_efficiency.value,
        "polytropic_exponent": res.polytropic_exponent,
        "polytropic_efficiency": res.polytropic_efficiency.value,
        "work": res.work.to("kW").magnitude if res.work is not None else float("nan"),
    }
