class InvalidInputError(ValueError):
    """Text entered for a scalar field did not parse as a number."""


class UnknownUnitError(KeyError):
    """A unit label or domain name that no selector knows about."""


class ProcessUnavailableError(ValueError):
    """Inlet and outlet must both be set before process values exist."""


class StaleStateError(RuntimeError):
    """State was mutated without running the recalculation pass."""
