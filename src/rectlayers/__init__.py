"""Rectangle layer packing: feasible piece subsets and three-layer coverings."""

__version__ = "0.1.0"
