"""waitgen - wait event catalog generator.

Turns a ``wait_event_names.txt`` catalog into the C enum header, the
name-lookup functions, the flat wait event table and the SGML documentation
tables, all from the same parsed and ordered catalog.
"""

__version__ = "0.1.0"
