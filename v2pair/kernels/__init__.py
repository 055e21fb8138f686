"""
Integer-only kernels for the pair engine.
"""
