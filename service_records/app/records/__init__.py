"""
Records package.

Defines the persisted record and the request handling around it.

Modules of interest:
- models: the ``Record`` dataclass and create/update results.
- service: validation, token issuance and checks, CRUD semantics
  against a ``RecordStore``.
"""
