"""Shared expense ledger: split group costs, track balances, settle debts."""

__version__ = "0.1.0"


# Import main lazily so that importing the engine doesn't pull in click
def __getattr__(name):
    if name == "main":
        from sharedledger.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
