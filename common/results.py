from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple
import math

import pandas as pd

from common.units import Q_


class ProcessMode(Enum):
    EXPANSION = "Expansion"
    COMPRESSION = "Compression"
    ISOBARIC = "Isobaric"


@dataclass(frozen=True)
class Efficiency:
    value: float

    @property
    def out_of_range(self) -> bool:
        # NaN compares false against both bounds, so it is flagged too
        return not (0.0 <= self.value <= 1.0)

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True)
class ProcessResult:
    """Inlet -> outlet results in base units (kPa, K, mol/l, J/mol, J/(mol-K))."""
    mode: ProcessMode
    pressure_ratio: float
    density_ratio: float
    temperature_ratio: float
    temperature_change: float         # active display temperature unit
    enthalpy_change: float            # J/mol
    entropy_change: float             # J/(mol-K)
    ave_cp_cv: float
    isentropic_temperature: float     # K
    isentropic_enthalpy: float        # J/mol
    isentropic_enthalpy_change: float # J/mol
    isentropic_efficiency: Efficiency
    polytropic_exponent: float
    polytropic_efficiency: Efficiency
    molar_mass: float                 # g/mol, inlet
    work: Q_ | None = None            # kW, needs a mass flow


@dataclass(frozen=True)
class MachineResult:
    input_speed: Q_     # rpm
    gear_ratio: float
    wheel_speed: Q_     # rpm
    wheel_diameter: Q_  # m
    tip_speed: Q_       # m/s
    tip_mach: float

    @property
    def is_set(self) -> bool:
        return self.tip_speed.magnitude != 0.0 and math.isfinite(self.tip_mach)


def write_results_csvs(
    state_table: pd.DataFrame,
    process_table: pd.DataFrame | None,
    outdir: str | Path,
    run_id: str,
) -> Tuple[str, str | None]:
    """
    Write CSVs:
      - <run_id>_states.csv   : property rows x (current, inlet, outlet) columns.
      - <run_id>_process.csv  : inlet -> outlet quantities, when available.

    Returns:
        (states_csv_path, process_csv_path or None)
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    states_path = outdir / f"{run_id}_states.csv"
    state_table.to_csv(states_path)

    if process_table is None:
        return str(states_path), None

    process_path = outdir / f"{run_id}_process.csv"
    process_table.to_csv(process_path, index=False)
    return str(states_path), str(process_path)
