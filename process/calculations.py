"""
Inlet -> outlet process quantities.

Every function reads the active EOS model's inlet and outlet records from a
ProcessView and raises ProcessUnavailableError when either point is not set.
Sign conventions cover both compression (pressure ratio >= 1) and expansion.
"""
from __future__ import annotations
from math import log as ln, pi, isfinite, nan, inf, copysign
import logging

from common.units import Q_
from common.results import Efficiency, ProcessMode, ProcessResult, MachineResult
from conversion.convert import temperature_to_display
from conversion.display import Temperature
from process.mirror import ProcessView

log = logging.getLogger(__name__)


# ---------------- ratios and changes ----------------

def pressure_ratio(view: ProcessView) -> float:
    i, o = view.endpoints()
    return o.p / i.p

def density_ratio(view: ProcessView) -> float:
    i, o = view.endpoints()
    return o.d / i.d

def temperature_ratio(view: ProcessView) -> float:
    i, o = view.endpoints()
    return o.t / i.t

def temperature_change(view: ProcessView, unit: Temperature = Temperature.K) -> float:
    # differenced in display units; affine scales make this differ from base subtraction
    i, o = view.endpoints()
    return temperature_to_display(o.t, unit) - temperature_to_display(i.t, unit)

def enthalpy_change(view: ProcessView) -> float:
    i, o = view.endpoints()
    return o.h - i.h

def entropy_change(view: ProcessView) -> float:
    i, o = view.endpoints()
    return o.s - i.s

def ave_cp_cv(view: ProcessView) -> float:
    i, o = view.endpoints()
    return (o.kappa + i.kappa) / 2.0


def classify(pr: float) -> ProcessMode:
    if pr < 1.0:
        return ProcessMode.EXPANSION
    if pr > 1.0:
        return ProcessMode.COMPRESSION
    return ProcessMode.ISOBARIC

def process_mode(view: ProcessView) -> ProcessMode:
    return classify(pressure_ratio(view))


# ---------------- isentropic path ----------------

def isentropic_outlet_temperature(view: ProcessView) -> float:
    """Ts = T_in * PR^((k-1)/k), one pass with the mean kappa of both ends."""
    i, _ = view.endpoints()
    k = ave_cp_cv(view)
    return i.t * pressure_ratio(view) ** ((k - 1.0) / k)

def isentropic_enthalpy(view: ProcessView) -> float:
    """Enthalpy of a side evaluation at (P_out, Ts) with the live gas."""
    i, o = view.endpoints()
    ts = isentropic_outlet_temperature(view)
    return view.probe(i.comp, o.p, ts).h

def isentropic_enthalpy_change(view: ProcessView) -> float:
    i, _ = view.endpoints()
    return isentropic_enthalpy(view) - i.h


def efficiency_from_enthalpies(pr: float, h_in: float, h_out: float, hs: float) -> Efficiency:
    if pr >= 1.0:
        num, den = hs - h_in, h_out - h_in
    else:
        num, den = h_in - h_out, h_in - hs
    if den == 0.0:
        return Efficiency(0.0)
    return Efficiency(num / den)

def _flag(name: str, eff: Efficiency) -> Efficiency:
    if eff.out_of_range:
        log.warning(f"{name} efficiency {eff.value:.4g} outside [0, 1]",
                    extra={"op": f"{name}_efficiency"})
    return eff

def isentropic_efficiency(view: ProcessView) -> Efficiency:
    i, o = view.endpoints()
    return _flag("isentropic", efficiency_from_enthalpies(pressure_ratio(view), i.h, o.h,
                                                          isentropic_enthalpy(view)))


# ---------------- polytropic path ----------------

def exponent_from_ratios(pr: float, dr: float) -> float:
    """n = ln(PR)/ln(DR); NaN or +-inf where the logarithms are singular."""
    if pr <= 0.0 or dr <= 0.0:
        return nan
    num, den = ln(pr), ln(dr)
    if den == 0.0:
        return nan if num == 0.0 else copysign(inf, num)
    return num / den

def polytropic_exponent(view: ProcessView) -> float:
    return exponent_from_ratios(pressure_ratio(view), density_ratio(view))

def efficiency_from_exponent(n: float, k: float) -> Efficiency:
    if not isfinite(n) or n == 1.0:
        return Efficiency(nan)
    return Efficiency((n / (n - 1.0)) * ((k - 1.0) / k))

def polytropic_efficiency(view: ProcessView) -> Efficiency:
    return _flag("polytropic", efficiency_from_exponent(polytropic_exponent(view), ave_cp_cv(view)))


# ---------------- machine ----------------

def work(view: ProcessView, mass_flow: Q_) -> Q_:
    """Shaft power from the mass-normalized enthalpy change."""
    i, _ = view.endpoints()
    dh_mass = Q_(enthalpy_change(view) / i.mm, "kJ/kg")   # J/mol / (g/mol) = J/g
    return (dh_mass * mass_flow.to("kg/s")).to("kW")

def tip_speed(wheel_diameter: Q_, wheel_speed: Q_) -> Q_:
    """pi * D * rpm / 60."""
    D = wheel_diameter.to("m").magnitude
    rpm = wheel_speed.to("rpm").magnitude
    return Q_(pi * D * rpm / 60.0, "m/s")

def tip_mach(u_tip: Q_, sound_speed: float) -> float:
    if sound_speed <= 0.0:
        return nan
    return u_tip.to("m/s").magnitude / sound_speed

def machine_data(view: ProcessView, input_speed: Q_, gear_ratio: float,
                 wheel_diameter: Q_) -> MachineResult:
    """Available without inlet/outlet; Mach is taken at the current point."""
    wheel_speed = (input_speed * gear_ratio).to("rpm")
    u = tip_speed(wheel_diameter, wheel_speed)
    return MachineResult(
        input_speed=input_speed.to("rpm"),
        gear_ratio=gear_ratio,
        wheel_speed=wheel_speed,
        wheel_diameter=wheel_diameter.to("m"),
        tip_speed=u,
        tip_mach=tip_mach(u, view.current.w),
    )


# ---------------- everything at once ----------------

def run_calculations(view: ProcessView, t_unit: Temperature = Temperature.K,
                     mass_flow: Q_ | None = None) -> ProcessResult:
    i, o = view.endpoints()
    pr = pressure_ratio(view)
    hs = isentropic_enthalpy(view)
    return ProcessResult(
        mode=classify(pr),
        pressure_ratio=pr,
        density_ratio=density_ratio(view),
        temperature_ratio=temperature_ratio(view),
        temperature_change=temperature_change(view, t_unit),
        enthalpy_change=enthalpy_change(view),
        entropy_change=entropy_change(view),
        ave_cp_cv=ave_cp_cv(view),
        isentropic_temperature=isentropic_outlet_temperature(view),
        isentropic_enthalpy=hs,
        isentropic_enthalpy_change=hs - i.h,
        isentropic_efficiency=_flag("isentropic", efficiency_from_enthalpies(pr, i.h, o.h, hs)),
        polytropic_exponent=polytropic_exponent(view),
        polytropic_efficiency=polytropic_efficiency(view),
        molar_mass=i.mm,
        work=work(view, mass_flow) if mass_flow is not None else None,
    )
