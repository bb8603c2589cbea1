"""
Implementation SQLModel du repository Review.
"""

from typing import Optional

from sqlalchemy import func
from sqlmodel import col, select

from kalanara.core.entities import Review
from kalanara.core.ports.repositories import IReviewRepository
from kalanara.infrastructure.persistence.database import SessionFactory
from kalanara.infrastructure.persistence.models import ReviewModel


class SQLModelReviewRepository(IReviewRepository):
    """Repository SQLModel pour les avis clients."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def _to_entity(self, model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            voucher_id=model.voucher_id,
            rating=model.rating,
            comment=model.comment,
            customer_name=model.customer_name,
            created_at=model.created_at,
        )

    def list_all(self) -> list[Review]:
        statement = select(ReviewModel).order_by(col(ReviewModel.created_at).desc())
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def list_by_min_rating(self, min_rating: int) -> list[Review]:
        statement = (
            select(ReviewModel)
            .where(ReviewModel.rating >= min_rating)
            .order_by(col(ReviewModel.created_at).desc())
        )
        with self._session_factory() as session:
            return [self._to_entity(m) for m in session.exec(statement).all()]

    def get_by_voucher_id(self, voucher_id: str) -> Optional[Review]:
        statement = select(ReviewModel).where(ReviewModel.voucher_id == voucher_id)
        with self._session_factory() as session:
            model = session.exec(statement).first()
            return self._to_entity(model) if model else None

    def save(self, review: Review) -> Review:
        model = ReviewModel(
            voucher_id=review.voucher_id,
            rating=review.rating,
            comment=review.comment,
            customer_name=review.customer_name,
        )
        with self._session_factory() as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return self._to_entity(model)

    def delete(self, review_id: str) -> bool:
        with self._session_factory() as session:
            model = session.get(ReviewModel, review_id)
            if model is None:
                return False
            session.delete(model)
            session.commit()
            return True

    def average_rating(self) -> float:
        """Note moyenne arrondie a une decimale (0 si aucun avis)."""
        with self._session_factory() as session:
            average = session.exec(select(func.avg(ReviewModel.rating))).one()
        if average is None:
            return 0.0
        return round(float(average), 1)
