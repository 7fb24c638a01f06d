"""Application services layer.

Services compose request building and response interpretation into the
operations callers use.
"""
