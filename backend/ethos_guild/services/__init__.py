"""Services Layer — one service per commerce component, orchestrating IO around core rules.

Invariants:
    - Every service takes an AsyncSession and commits at most once per operation
    - Services raise GuildError subclasses; routes never catch them

Design Decisions:
    - One file per component for locality (catalog, collaboration, checkout,
      settlement, ticketing, venues, qr_directory, reviews, receipts)
"""
