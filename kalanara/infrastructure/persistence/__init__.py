"""
Module de persistance pour Kalanara.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine, fabrique de sessions, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports repository

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    engine = create_db_engine("sqlite:///data/kalanara.db")
    init_db(engine)
    repo = SQLModelVoucherRepository(make_session_factory(engine))
"""

from kalanara.infrastructure.persistence.database import (
    SessionFactory,
    create_db_engine,
    init_db,
    make_session_factory,
)

__all__ = [
    "SessionFactory",
    "create_db_engine",
    "init_db",
    "make_session_factory",
]
