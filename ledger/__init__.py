from ledger.contract_client import LedgerClient, LedgerError, LedgerTransaction

__all__ = ["LedgerClient", "LedgerError", "LedgerTransaction"]
