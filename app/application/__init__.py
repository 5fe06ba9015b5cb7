"""Application layer: DTOs and use-case services.

Services take repositories, raise domain exceptions and never commit; the
request-scoped session dependency owns the transaction.
"""
