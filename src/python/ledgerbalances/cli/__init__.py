"""Command line interface for ledgerbalances."""
