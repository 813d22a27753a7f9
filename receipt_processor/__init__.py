"""Receipt Processor — receipt validation, scoring and in-memory ledger."""
