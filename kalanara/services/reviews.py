"""
Avis clients.

Un avis ne peut etre laisse qu'une fois par voucher, et seulement apres
utilisation du soin (voucher REDEEMED).
"""

from typing import Optional

from loguru import logger

from kalanara.core.entities import Review
from kalanara.core.errors import ReviewError, VoucherNotFoundError
from kalanara.core.ports.repositories import IReviewRepository, IVoucherRepository
from kalanara.core.value_objects import VoucherStatus

MIN_RATING = 1
MAX_RATING = 5


class ReviewService:
    """Depot et moderation des avis."""

    def __init__(self, review_repo: IReviewRepository, voucher_repo: IVoucherRepository) -> None:
        self._reviews = review_repo
        self._vouchers = voucher_repo

    def list_reviews(self, min_rating: Optional[int] = None) -> list[Review]:
        if min_rating is None:
            return self._reviews.list_all()
        return self._reviews.list_by_min_rating(min_rating)

    def average_rating(self) -> float:
        return self._reviews.average_rating()

    def create_review(
        self,
        voucher_id: str,
        rating: int,
        comment: Optional[str] = None,
        customer_name: Optional[str] = None,
    ) -> Review:
        """
        Enregistre l'avis d'un beneficiaire.

        Raises:
            VoucherNotFoundError: Voucher inconnu
            ReviewError: Note hors [1, 5], voucher non utilise ou avis deja depose
        """
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ReviewError(f"La note doit etre comprise entre {MIN_RATING} et {MAX_RATING}")

        voucher = self._vouchers.get_by_id(voucher_id)
        if voucher is None:
            raise VoucherNotFoundError()
        if voucher.status is not VoucherStatus.REDEEMED:
            raise ReviewError("Seul un voucher utilise peut recevoir un avis")
        if self._reviews.get_by_voucher_id(voucher.id):
            raise ReviewError("Un avis existe deja pour ce voucher")

        review = self._reviews.save(
            Review(
                voucher_id=voucher.id,
                rating=rating,
                comment=comment.strip() if comment and comment.strip() else None,
                customer_name=(customer_name or "").strip() or voucher.recipient_name,
            )
        )
        logger.info("Avis enregistre", voucher_code=voucher.code, rating=rating)
        return review

    def delete_review(self, review_id: str) -> None:
        """Raises: ReviewError si l'avis n'existe pas"""
        if not self._reviews.delete(review_id):
            raise ReviewError(f"Avis introuvable : {review_id}")
        logger.info("Avis supprime", review_id=review_id)
