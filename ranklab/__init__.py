"""Message passing between ranked worker threads, with example programs and a parallel trapezoidal rule."""

__version__ = "0.1.0"

__all__ = ["comm", "examples", "trapezoid"]