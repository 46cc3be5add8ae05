"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Coordinate ranges, tolerances, vertex-count limits
- exceptions: Custom exception hierarchy
- geometry: Shared planar geometry primitives
"""
