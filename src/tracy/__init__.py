"""
Tracy: nested dependency case files from flat module dependency records.

Takes the records a module scanner emits ("X depends on [Y, Z]") and files
them into one nested dependency tree per entry module, cutting circular
and already-walked edges so every tree stays finite.
"""

__version__ = "0.1.0"
