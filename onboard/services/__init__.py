"""Data store, aggregators and view engine."""
