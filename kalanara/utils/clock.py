"""
Horloge de l'application.

SQLite ne conserve pas le fuseau horaire : toutes les dates sont stockées en
UTC naïf pour que les comparaisons après relecture restent cohérentes.
"""

import calendar
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Retourne l'instant courant en UTC, sans information de fuseau."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_months(start: date, months: int) -> date:
    """
    Ajoute un nombre de mois à une date.

    Le jour est ramené au dernier jour du mois cible si nécessaire
    (31 janvier + 1 mois = 28 ou 29 février).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
