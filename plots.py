import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from common.models import ProcessPoint
from conversion import convert
from process.calculations import isentropic_outlet_temperature
from process.session import Session


def hs_points(session: Session):
    """(label, s, h) for inlet, outlet and the isentropic outlet, in display units."""
    view = session.view
    i, o = view.endpoints()
    iso = view.probe(i.comp, o.p, isentropic_outlet_temperature(view))
    units = session.units
    pts = []
    for label, rec in (("inlet", i), ("outlet", o), ("isentropic outlet", iso)):
        pts.append((
            label,
            convert.entropy_to_display(rec.s, units.entropy, rec.mm),
            convert.energy_to_display(rec.h, units.energy, rec.mm),
        ))
    return pts


def plot_hs(session: Session, outdir: str, run_id: str = "session") -> str:
    os.makedirs(outdir, exist_ok=True)
    pts = {label: (s, h) for label, s, h in hs_points(session)}
    units = session.units

    fig = plt.figure()
    s_in, h_in = pts["inlet"]
    for end, style in (("outlet", "-"), ("isentropic outlet", "--")):
        s, h = pts[end]
        plt.plot([s_in, s], [h_in, h], style, marker="o", label=end)
    plt.annotate(ProcessPoint.INLET.value, (s_in, h_in))
    plt.xlabel(f"Entropy [{units.entropy.value}]")
    plt.ylabel(f"Enthalpy [{units.energy.value}]")
    plt.title(f"h-s: {session.gas_name}, {session.model.value}")
    plt.legend()

    path = os.path.join(outdir, f"{run_id}_hs.png")
    fig.tight_layout()
    fig.savefig(path, dpi=200)
    plt.close(fig)
    return path

