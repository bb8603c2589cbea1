"""
Point d'entrée CLI de Kalanara.

Initialise le container DI, configure le logging et fournit les commandes
d'exploitation (base, comptes admin, catalogue, vouchers).
"""

import asyncio
from typing import Annotated, NoReturn, Optional

import typer
from loguru import logger

from . import __version__
from .config import Settings
from .container import Container
from .core.errors import KalanaraError
from .core.value_objects import AdminRole, VoucherStatus
from .logging_config import configure_logging
from .utils.formatting import format_currency, format_date

app = typer.Typer(
    name="kalanara",
    help="Boutique de vouchers cadeaux Kalanara Spa",
)
container = Container()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _fail(error: KalanaraError) -> NoReturn:
    typer.echo(f"Erreur : {error}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration Kalanara")
    typer.echo(f"URL publique : {config.app_url}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Paiement Midtrans : {'activé' if config.payment_enabled else 'désactivé'}")
    typer.echo(f"Mode Midtrans : {'production' if config.midtrans_is_production else 'sandbox'}")
    typer.echo(f"E-mails Resend : {'activés' if config.email_enabled else 'désactivés'}")
    typer.echo(f"Validité des vouchers : {config.voucher_validity_months} mois")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Kalanara v{__version__}")


@app.command(name="init-db")
def init_db() -> None:
    """Crée les tables manquantes."""
    container.database.init()
    typer.echo(f"Base initialisée : {get_config().database_url}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web Kalanara."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("kalanara.web.app:app", host=host, port=port, reload=reload)


@app.command(name="create-admin")
def create_admin(
    email: Annotated[str, typer.Argument(help="E-mail de connexion")],
    name: Annotated[str, typer.Option(help="Nom affiché")] = "",
    role: Annotated[AdminRole, typer.Option(help="Rôle du compte")] = AdminRole.SUPER_ADMIN,
    password: Annotated[
        Optional[str],
        typer.Option(help="Mot de passe (généré si absent)"),
    ] = None,
) -> None:
    """Crée un compte du back-office."""
    try:
        user, temporary = container.admin_user_service().create_user(
            email=email, name=name, role=role, password=password
        )
    except KalanaraError as e:
        _fail(e)
    typer.echo(f"Compte créé : {user.email} ({user.role.value})")
    if temporary:
        typer.echo(f"Mot de passe temporaire : {temporary}")


@app.command(name="seed-services")
def seed_services() -> None:
    """Crée le catalogue de soins initial (base vide uniquement)."""
    created = container.catalog_service().seed_defaults()
    if not created:
        typer.echo("Catalogue déjà présent, rien à faire")
        return
    for service in created:
        typer.echo(f"  {service.name} - {format_currency(service.price)}")
    typer.echo(f"{len(created)} soins créés")


@app.command()
def verify(code: Annotated[str, typer.Argument(help="Code du voucher")]) -> None:
    """Affiche l'état d'un voucher."""
    try:
        view = container.voucher_service().verify(code)
    except KalanaraError as e:
        _fail(e)
    voucher = view.voucher
    typer.echo(f"Code : {voucher.code}")
    typer.echo(f"Statut : {view.status.value}")
    typer.echo(f"Soin : {view.service.name if view.service else voucher.service_id}")
    typer.echo(f"Bénéficiaire : {voucher.recipient_name}")
    typer.echo(f"Valeur : {format_currency(voucher.amount)}")
    typer.echo(f"Valide jusqu'au : {format_date(voucher.expiry_date)}")


@app.command()
def redeem(code: Annotated[str, typer.Argument(help="Code du voucher")]) -> None:
    """Marque un voucher comme utilisé."""
    try:
        voucher = container.voucher_service().redeem(code)
    except KalanaraError as e:
        _fail(e)
    typer.echo(f"Voucher {voucher.code} utilisé")


@app.command(name="mark-paid")
def mark_paid(order_id: Annotated[str, typer.Argument(help="ID de la commande")]) -> None:
    """Confirme manuellement le paiement d'une commande et émet le voucher."""
    try:
        order, voucher, report = asyncio.run(container.order_service().mark_paid(order_id))
    except KalanaraError as e:
        _fail(e)
    typer.echo(f"Commande {order.id} : {order.payment_status.value}")
    typer.echo(f"Voucher émis : {voucher.code}")
    typer.echo(f"E-mail envoyé : {'oui' if report.email_sent else 'non'}")
    if report.whatsapp_url:
        typer.echo(f"WhatsApp : {report.whatsapp_url}")
    for error in report.errors:
        typer.echo(f"  ! {error}", err=True)


@app.command()
def vouchers(
    status: Annotated[
        Optional[VoucherStatus],
        typer.Option(help="Filtrer par statut effectif"),
    ] = None,
) -> None:
    """Liste les vouchers."""
    items = container.voucher_service().list_vouchers(status)
    for voucher in items:
        typer.echo(
            f"{voucher.code}  {voucher.status.value:<8}  "
            f"{format_date(voucher.expiry_date):<20}  {voucher.recipient_name}"
        )
    typer.echo(f"Total : {len(items)} voucher(s)")


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de Kalanara", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
