"""Application web FastAPI (API JSON de la boutique et du back-office)."""
