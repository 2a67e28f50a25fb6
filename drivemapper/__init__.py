"""
drivemapper - Reconcile network drive mappings for login scripts.
"""

__version__ = "0.1.0"
