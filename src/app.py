"""Storefront ASGI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the configuration overlay (development, test, production).
from storefront.api import create_app
from storefront.domain import storefront
from storefront.utils.db import setup_db

storefront.init()
setup_db(storefront)

app = create_app()
