"""Routes de l'API JSON (boutique, verification, webhook, back-office)."""
