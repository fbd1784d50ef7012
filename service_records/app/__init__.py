"""
Records Service package for the Record Access Layer.

This package owns user records end to end:

- app.main: RPC surface (CreateRecord, GetRecord, UpdateRecord) and health.
- app.records: Record model, validation, token issuance and checks.
- app.persistence: Record store contract plus PostgreSQL and in-memory stores.

Guidelines:
- The service is stateless; every call re-reads from the store.
- Failures leave as typed errors carrying an RPC code; never swallow them.
- Never log bearer tokens.
"""
