"""
barberslots - slot availability and booking rules for a single-chair barbershop.
"""

__version__ = "0.1.0"
