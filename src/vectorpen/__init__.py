"""Vectorpen - Pen-tool path editing engine.

Vectorpen keeps two representations of a vector path in lockstep: the
path-description string (``M x y L x y C x1 y1 x2 y2 x y Z``) and the list of
structured commands it describes. Pointer gestures are turned into edits by
an interaction state machine, and direct edits of the string are parsed back
into commands.

Example:
    $ vectorpen parse "M 0 0 L 30 0"
    $ vectorpen replay session.json -o drawing.json
"""

__version__ = "0.1.0"
__author__ = "Vectorpen contributors"

__all__ = ["__author__", "__version__"]
