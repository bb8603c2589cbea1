"""
Configuration de la base de donnees pour Kalanara.

Ce module fournit :
- Engine SQLAlchemy (SQLite par defaut, configuration multi-thread)
- Fabrique de sessions courtes (une session par operation de repository)
- Fonction d'initialisation des tables

La base de donnees est configuree via KALANARA_DATABASE_URL (defaut: sqlite:///data/kalanara.db).
"""

from collections.abc import Callable
from functools import partial
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

SessionFactory = Callable[[], Session]


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cree l'engine pour l'URL donnee.

    Pour SQLite fichier, le repertoire parent est cree si necessaire.
    Pour SQLite en memoire, une StaticPool partage l'unique connexion entre
    les threads (sinon chaque connexion verrait une base vide).
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    db_path = Path(database_url.replace("sqlite:///", ""))
    db_path.parent.mkdir(exist_ok=True, parents=True)
    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False},
    )


def make_session_factory(engine: Engine) -> SessionFactory:
    """
    Retourne une fabrique de sessions liee a l'engine.

    Utilisation :
        with session_factory() as session:
            session.add(model)
            session.commit()

    expire_on_commit=False permet de relire les attributs apres commit
    pour la conversion en entite domaine.
    """
    return partial(Session, engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Cette fonction importe les modeles pour enregistrer leurs metadonnees
    dans SQLModel.metadata, puis cree les tables correspondantes si elles
    n'existent pas deja.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    # L'import est fait ici pour eviter les imports circulaires
    from kalanara.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
