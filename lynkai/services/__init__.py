"""Services: credential store, verification, refresh ledger, sessions."""
