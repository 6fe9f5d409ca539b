"""
Galley kitchen-equipment package.

The package reconciles advisor-generated maintenance schedules and equipment
recommendations with the household's equipment registry and grocery lists.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
