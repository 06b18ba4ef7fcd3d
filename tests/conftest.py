import math
import pytest

from common.models import EosModel, GasStateRecord
from common.props import EosOracle
from common.units import Q_
from process.mirror import GasStateMirror
from process.session import Session, SessionConfig

R = 8.314462618  # J/(mol-K)

_MM = {
    "nitrogen": 28.0134, "oxygen": 31.9988, "argon": 39.948, "methane": 16.043,
    "carbon_dioxide": 44.01, "carbon_monoxide": 28.01, "helium": 4.0026, "hydrogen": 2.016,
}

class _IdealGas(EosOracle):
    # ideal gas; the two models differ only in cp so a model switch is visible
    calls = {"density": 0, "properties": 0}

    def __init__(self, model):
        super().__init__()
        self.model = model
        self.cp_r = 3.5 if model is EosModel.GERG2008 else 3.6
        self._p = 0.0
        self._t = 0.0
        self._rec = GasStateRecord()
        self._d = 0.0

    @property
    def pressure(self): return self._p
    @pressure.setter
    def pressure(self, value): self._p = value

    @property
    def temperature(self): return self._t
    @temperature.setter
    def temperature(self, value): self._t = value

    def compute_density(self):
        _IdealGas.calls["density"] += 1
        self._d = self._p / (R * self._t)   # kPa / (J/mol) = mol/l

    def compute_properties(self):
        _IdealGas.calls["properties"] += 1
        p, t = self._p, self._t
        mm = sum(x * _MM.get(c, 28.0) for c, x in self.comp.items())
        cp = self.cp_r * R
        cv = cp - R
        h = cp * t
        s = cp * math.log(t / 298.15) - R * math.log(p / 101.325)
        self._rec = GasStateRecord(
            p=p, t=t, d=self._d, mm=mm, u=h - R * t, h=h, s=s, cv=cv, cp=cp,
            kappa=cp / cv, z=1.0, w=math.sqrt(cp / cv * R * t / (mm / 1000.0)),
            g=h - t * s, jt=0.0, comp=dict(self.comp),
        )

    def record(self):
        return self._rec


@pytest.fixture
def fake_factory():
    _IdealGas.calls = {"density": 0, "properties": 0}
    return lambda model: _IdealGas(model)

@pytest.fixture
def oracle_calls(fake_factory):
    return _IdealGas.calls

@pytest.fixture
def mirror(fake_factory):
    return GasStateMirror(fake_factory, {"nitrogen": 0.78, "oxygen": 0.21, "argon": 0.01},
                          p_kpa=100.0, t_k=300.0)

@pytest.fixture
def session(fake_factory):
    cfg = SessionConfig(pressure=Q_(100.0, "kPa"), temperature=Q_(300.0, "K"))
    return Session(cfg, factory=fake_factory)

@pytest.fixture
def compression(session):
    # 100 kPa / 300 K -> 200 kPa / 400 K, base display units
    session.set_inlet()
    session.set_pressure(200.0)
    session.set_temperature(400.0)
    session.set_outlet()
    return session
