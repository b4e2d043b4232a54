"""BlockFall: a deterministic falling-block puzzle engine."""

__version__ = "0.1.0"
