"""Core domain: pure calculators, ports and services."""
