"""apptgrid.tools package

Developer utilities (CI gate).

Keep this package's __init__ free of eager imports so `python -m
apptgrid.tools.ci` has no import-time side effects.
"""

__all__: list[str] = []
