"""
Implementation SQLModel du repository Order.

Les transitions de statut de paiement passent par un UPDATE conditionnel
(WHERE payment_status = 'PENDING') : deux notifications Midtrans
concurrentes pour la meme commande ne peuvent pas la traiter deux fois.
"""

from typing import Optional

from sqlalchemy import update
from sqlmodel import col, select

from kalanara.core.entities import Order
from kalanara.core.ports.repositories import IOrderRepository
from kalanara.core.value_objects import DeliveryMethod, PaymentStatus, SendTo
from kalanara.infrastructure.persistence.database import SessionFactory
from kalanara.infrastructure.persistence.models import OrderModel


class SQLModelOrderRepository(IOrderRepository):
    """Repository SQLModel pour les commandes."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def _to_entity(self, model: OrderModel) -> Order:
        return Order(
            id=model.id,
            customer_name=model.customer_name,
            customer_email=model.customer_email,
            customer_phone=model.customer_phone,
            service_id=model.service_id,
            total_amount=model.total_amount,
            payment_status=PaymentStatus(model.payment_status),
            payment_method=model.payment_method,
            payment_order_id=model.payment_order_id,
            transaction_id=model.transaction_id,
            payment_type=model.payment_type,
            transaction_time=model.transaction_time,
            recipient_name=model.recipient_name,
            recipient_email=model.recipient_email,
            recipient_phone=model.recipient_phone,
            sender_message=model.sender_message,
            delivery_method=DeliveryMethod(model.delivery_method),
            send_to=SendTo(model.send_to),
            voucher_id=model.voucher_id,
            created_at=model.created_at,
        )

    def _apply(self, model: OrderModel, entity: Order) -> None:
        """Copie les champs modifiables de l'entite vers le modele."""
        model.customer_name = entity.customer_name
        model.customer_email = entity.customer_email
        model.customer_phone = entity.customer_phone
        model.service_id = entity.service_id
        model.total_amount = entity.total_amount
        model.payment_status = entity.payment_status.value
        model.payment_method = entity.payment_method
        model.payment_order_id = entity.payment_order_id
        model.transaction_id = entity.transaction_id
        model.payment_type = entity.payment_type
        model.transaction_time = entity.transaction_time
        model.recipient_name = entity.recipient_name
        model.recipient_email = entity.recipient_email
        model.recipient_phone = entity.recipient_phone
        model.sender_message = entity.sender_message
        model.delivery_method = entity.delivery_method.value
        model.send_to = entity.send_to.value
        model.voucher_id = entity.voucher_id

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Recupere une commande par son ID."""
        with self._session_factory() as session:
            model = session.get(OrderModel, order_id)
            return self._to_entity(model) if model else None

    def get_by_payment_order_id(self, payment_order_id: str) -> Optional[Order]:
        """Recupere une commande par l'identifiant Midtrans."""
        statement = select(OrderModel).where(OrderModel.payment_order_id == payment_order_id)
        with self._session_factory() as session:
            model = session.exec(statement).first()
            return self._to_entity(model) if model else None

    def list_all(self) -> list[Order]:
        """Liste les commandes, les plus recentes en premier."""
        statement = select(OrderModel).order_by(col(OrderModel.created_at).desc())
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def save(self, order: Order) -> Order:
        """Sauvegarde une commande (insertion ou mise a jour)."""
        with self._session_factory() as session:
            existing = session.get(OrderModel, order.id) if order.id else None
            if existing:
                model = existing
                self._apply(model, order)
            else:
                model = OrderModel(
                    customer_name=order.customer_name,
                    customer_email=order.customer_email,
                    customer_phone=order.customer_phone,
                    total_amount=order.total_amount,
                )
                self._apply(model, order)
                if order.id:
                    model.id = order.id
                if order.created_at:
                    model.created_at = order.created_at
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)

    def mark_payment_status(
        self,
        order_id: str,
        status: PaymentStatus,
        transaction_id: Optional[str] = None,
        payment_type: Optional[str] = None,
        transaction_time: Optional[str] = None,
    ) -> bool:
        """Transition conditionnelle PENDING -> status."""
        values: dict[str, object] = {"payment_status": status.value}
        if transaction_id is not None:
            values["transaction_id"] = transaction_id
        if payment_type is not None:
            values["payment_type"] = payment_type
            values["payment_method"] = payment_type
        if transaction_time is not None:
            values["transaction_time"] = transaction_time

        statement = (
            update(OrderModel)
            .where(col(OrderModel.id) == order_id)
            .where(col(OrderModel.payment_status) == PaymentStatus.PENDING.value)
            .values(**values)
        )
        with self._session_factory() as session:
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount == 1

    def attach_voucher(self, order_id: str, voucher_id: str) -> bool:
        """Rattache le voucher a la commande (sans ecraser un voucher existant)."""
        statement = (
            update(OrderModel)
            .where(col(OrderModel.id) == order_id)
            .where(col(OrderModel.voucher_id).is_(None))
            .values(voucher_id=voucher_id)
        )
        with self._session_factory() as session:
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount == 1
