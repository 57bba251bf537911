"""Core engine: exceptions, unit rules and conversion, quantities, display helpers."""
