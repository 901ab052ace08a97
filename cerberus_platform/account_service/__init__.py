"""
account_service package

- FastAPI application (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- JWT and password logic (`auth.py`) plus request guards (`security.py`)
- Pydantic schemas (`schemas.py`)
"""
