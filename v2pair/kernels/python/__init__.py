"""
Pair-contract integer math.

Pure functions over ints returning frozen result dataclasses. Every division
floors exactly as the deployed contract does, so quotes here match on-chain
results unit for unit.
"""
