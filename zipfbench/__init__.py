"""Zipf-Mandelbrot set/clear workload generator for bitmap services."""

__version__ = "0.1.0"
