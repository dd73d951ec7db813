"""
auth_service tests

Covers the core backend logic of the authentication service:

- Password hashing policy (`hashing.py`)
- Token issue/verify (`tokens.py`)
- User directory implementations (`directory.py`, `models.py`, `db.py`)
- Registration, login and token re-verification (`service.py`)
- FastAPI application and routes (`main.py`, `routes/`)
"""
