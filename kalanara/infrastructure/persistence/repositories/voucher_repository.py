"""
Implementation SQLModel du repository Voucher.

La garde contre la double utilisation repose sur transition_status :
UPDATE vouchers SET status = :new WHERE id = :id AND status = :expected.
Seule la premiere requete concurrente voit rowcount == 1.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import update
from sqlmodel import col, select

from kalanara.core.entities import Voucher
from kalanara.core.ports.repositories import IVoucherRepository
from kalanara.core.value_objects import VoucherStatus
from kalanara.infrastructure.persistence.database import SessionFactory
from kalanara.infrastructure.persistence.models import VoucherModel


class SQLModelVoucherRepository(IVoucherRepository):
    """Repository SQLModel pour les vouchers."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def _to_entity(self, model: VoucherModel) -> Voucher:
        return Voucher(
            id=model.id,
            code=model.code,
            order_id=model.order_id,
            service_id=model.service_id,
            recipient_name=model.recipient_name,
            recipient_email=model.recipient_email,
            recipient_phone=model.recipient_phone,
            sender_name=model.sender_name,
            sender_message=model.sender_message,
            amount=model.amount,
            status=VoucherStatus(model.status),
            expiry_date=model.expiry_date,
            created_at=model.created_at,
            redeemed_at=model.redeemed_at,
        )

    def _first(self, statement) -> Optional[Voucher]:
        with self._session_factory() as session:
            model = session.exec(statement).first()
            return self._to_entity(model) if model else None

    def get_by_id(self, voucher_id: str) -> Optional[Voucher]:
        """Recupere un voucher par son ID."""
        with self._session_factory() as session:
            model = session.get(VoucherModel, voucher_id)
            return self._to_entity(model) if model else None

    def get_by_code(self, code: str) -> Optional[Voucher]:
        """Recupere un voucher par son code (les codes sont stockes en majuscules)."""
        return self._first(
            select(VoucherModel).where(VoucherModel.code == code.strip().upper())
        )

    def get_by_order_id(self, order_id: str) -> Optional[Voucher]:
        """Recupere le voucher emis pour une commande."""
        return self._first(select(VoucherModel).where(VoucherModel.order_id == order_id))

    def code_exists(self, code: str) -> bool:
        """Verifie si un code est deja attribue."""
        statement = select(VoucherModel.id).where(VoucherModel.code == code.upper())
        with self._session_factory() as session:
            return session.exec(statement).first() is not None

    def list_all(self) -> list[Voucher]:
        """Liste les vouchers, les plus recents en premier."""
        statement = select(VoucherModel).order_by(col(VoucherModel.created_at).desc())
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def save(self, voucher: Voucher) -> Voucher:
        """
        Insere un nouveau voucher.

        Les changements d'etat passent par transition_status / update_expiry,
        jamais par une reecriture complete de la ligne.

        Raises:
            sqlalchemy.exc.IntegrityError: Si le code ou la commande a deja un voucher
        """
        model = VoucherModel(
            code=voucher.code.upper(),
            order_id=voucher.order_id,
            service_id=voucher.service_id,
            recipient_name=voucher.recipient_name,
            recipient_email=voucher.recipient_email,
            recipient_phone=voucher.recipient_phone,
            sender_name=voucher.sender_name,
            sender_message=voucher.sender_message,
            amount=voucher.amount,
            status=voucher.status.value,
            expiry_date=voucher.expiry_date,
            redeemed_at=voucher.redeemed_at,
        )
        if voucher.id:
            model.id = voucher.id
        if voucher.created_at:
            model.created_at = voucher.created_at
        with self._session_factory() as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)

    def transition_status(
        self,
        voucher_id: str,
        expected: VoucherStatus,
        new: VoucherStatus,
        redeemed_at: Optional[datetime] = None,
    ) -> bool:
        """Change le statut si le statut courant vaut `expected` (compare-and-set)."""
        values: dict[str, object] = {"status": new.value}
        if redeemed_at is not None:
            values["redeemed_at"] = redeemed_at

        statement = (
            update(VoucherModel)
            .where(col(VoucherModel.id) == voucher_id)
            .where(col(VoucherModel.status) == expected.value)
            .values(**values)
        )
        with self._session_factory() as session:
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount == 1

    def update_expiry(self, voucher_id: str, expiry_date: date) -> bool:
        """Modifie la date d'expiration d'un voucher encore ACTIVE."""
        statement = (
            update(VoucherModel)
            .where(col(VoucherModel.id) == voucher_id)
            .where(col(VoucherModel.status) == VoucherStatus.ACTIVE.value)
            .values(expiry_date=expiry_date)
        )
        with self._session_factory() as session:
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount == 1
