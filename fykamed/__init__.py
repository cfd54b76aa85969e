"""Clinic management in CSV files: doctors, patients, the care queue and session reports."""

__version__ = "0.1.0"
__all__ = ["__version__"]