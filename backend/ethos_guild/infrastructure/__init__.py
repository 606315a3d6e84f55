"""Infrastructure Layer — database manager, logging, and external collaborator adapters.

Invariants:
    - All external calls bounded by timeouts and mapped to GuildError subclasses
    - Adapters implement the Protocols in core/repository_protocols.py

Design Decisions:
    - Local fallbacks (LocalPaymentGateway, LoggingReceiptNotary) selected when
      no credentials are configured, so the service runs out-of-the-box
"""
