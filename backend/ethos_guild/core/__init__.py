"""Core Layer — pure commerce rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (payout math, supply, splits, access)

Design Decisions:
    - Functional core separated from imperative shell: services read rows,
      core decides, services write
"""
