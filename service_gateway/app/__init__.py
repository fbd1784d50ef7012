"""
API Gateway Service package for the Record Access Layer.

The gateway fronts client requests on ``/record``:
- Decoding: JSON bodies and numeric path ids, rejected with 400
- Bearer extraction: ``Authorization: Bearer <token>``, 401 when absent
- Translation: REST calls to records-service RPCs, RPC codes to HTTP status

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: RPC client for the records service.
- app.domain: Pure translation helpers and response views.
"""
