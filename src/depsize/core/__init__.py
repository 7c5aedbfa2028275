"""Core types, errors and result helpers shared across depsize."""
