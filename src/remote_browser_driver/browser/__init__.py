"""Remote session contract and its adapters."""
