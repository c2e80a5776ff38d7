"""build-order: dependency-ordered build plans for .NET project trees."""

__version__ = "0.1.0"
