# main.py
from __future__ import annotations

import argparse
import logging

from common.errors import InvalidInputError, ProcessUnavailableError, UnknownUnitError
from common.logging_utils import setup_logging
from common.models import EosModel
from common.results import write_results_csvs
from loader import load_session
from plots import plot_hs
from process.report import session_process_table, state_table
from process.session import Session

log = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Gas state and inlet/outlet process calculator.")
    ap.add_argument("--config", default="config/session.yaml")
    ap.add_argument("--log", default="INFO", help="TRACE, DEBUG, INFO, WARNING")
    ap.add_argument("--model", choices=[m.value for m in EosModel])
    ap.add_argument("--gas", help="named gas from the library, e.g. Air")
    ap.add_argument("--units", action="append", default=[], metavar="DOMAIN=LABEL",
                    help="display unit, e.g. pressure=Bar (repeatable)")
    ap.add_argument("--inlet", nargs=2, metavar=("P", "T"), help="in active display units")
    ap.add_argument("--outlet", nargs=2, metavar=("P", "T"), help="in active display units")
    ap.add_argument("--flow", help="mass or volume flow in the active flow unit")
    ap.add_argument("--speed", help="input speed [rpm]")
    ap.add_argument("--gear", help="gear ratio")
    ap.add_argument("--diameter", help="wheel diameter [m]")
    ap.add_argument("--csv", metavar="OUTDIR", help="write state/process CSVs here")
    ap.add_argument("--plot", metavar="OUTDIR", help="write an h-s chart here")
    ap.add_argument("--run-id", default="session")
    return ap.parse_args(argv)


def _set_point(session: Session, pt, which: str) -> None:
    p, t = pt
    session.apply_input("pressure", p)
    session.apply_input("temperature", t)
    if which == "inlet":
        session.set_inlet()
    else:
        session.set_outlet()


def build_session(args: argparse.Namespace) -> Session:
    session = Session(load_session(args.config))
    for item in args.units:
        domain, sep, label = item.partition("=")
        if not sep:
            raise InvalidInputError(f"--units expects DOMAIN=LABEL, got {item!r}")
        session.set_unit(domain.strip(), label.strip())
    if args.gas:
        session.set_gas_by_name(args.gas)
    if args.model:
        session.set_model(EosModel(args.model))
    if args.inlet:
        _set_point(session, args.inlet, "inlet")
    if args.outlet:
        _set_point(session, args.outlet, "outlet")
    if args.flow is not None:
        session.apply_input("flow", args.flow)
    for field_name, text in (("input_speed", args.speed), ("gear_ratio", args.gear),
                             ("wheel_diameter", args.diameter)):
        if text is not None:
            session.apply_input(field_name, text)
    return session


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log)

    try:
        session = build_session(args)
    except (InvalidInputError, UnknownUnitError, KeyError, ValueError) as e:
        log.error(f"bad input: {e}")
        return 2

    states = state_table(session)
    print(f"\n{session.gas_name} ({session.model.value})")
    print(states.to_string())

    process = session_process_table(session)
    if process is not None:
        print()
        print(process.to_string(index=False))
    else:
        log.info("inlet and outlet not both set; process results skipped")

    machine = session.machine()
    if machine.is_set:
        print(f"\nwheel speed {machine.wheel_speed:.6g~P}, tip speed {machine.tip_speed:.6g~P}, "
              f"tip Mach {machine.tip_mach:.4g}")

    if args.csv:
        paths = write_results_csvs(states, process, args.csv, args.run_id)
        log.info(f"CSV written: {paths}")
    if args.plot:
        try:
            log.info(f"plot written: {plot_hs(session, args.plot, args.run_id)}")
        except ProcessUnavailableError as e:
            log.warning(f"no plot: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
