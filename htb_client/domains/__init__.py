"""Domain layer (HTB domain models).

Domain modules hold plain read-only data and derivations over it; they do not
perform I/O.
"""
