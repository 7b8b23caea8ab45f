"""
models/ - Domain Models
=======================
Plain dataclasses for stored entities and the filter objects used to query them.
"""
