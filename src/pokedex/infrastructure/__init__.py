"""Infrastructure layer: storage backends, database, remote API adapter.

This layer depends on the domain layer, config models, stdlib and third-party libs
(SQLAlchemy, requests, pydantic). It must never import from services,
commands, or output. The service layer bridges between raw
input and these backends.
"""
