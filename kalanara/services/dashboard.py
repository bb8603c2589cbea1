"""
Statistiques du tableau de bord admin.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from kalanara.core.ports.repositories import (
    IOrderRepository,
    IReviewRepository,
    IServiceRepository,
    IVoucherRepository,
)
from kalanara.core.value_objects import VoucherStatus
from kalanara.utils.clock import utcnow
from kalanara.utils.constants import WEEKDAY_ABBREVIATIONS

REVENUE_DAYS = 7
RECENT_ORDERS_LIMIT = 5
RECENT_REVIEWS_LIMIT = 3


@dataclass(frozen=True)
class DailyRevenue:
    day: str
    revenue: int
    orders: int


@dataclass(frozen=True)
class RecentOrder:
    id: str
    customer_name: str
    service_name: str
    total_amount: int
    payment_status: str
    created_at: Optional[datetime]


@dataclass(frozen=True)
class RecentReview:
    id: str
    rating: int
    comment: Optional[str]
    customer_name: str


@dataclass
class DashboardStats:
    total_revenue: int = 0
    active_vouchers: int = 0
    redeemed_vouchers: int = 0
    expired_vouchers: int = 0
    total_orders: int = 0
    total_services: int = 0
    total_vouchers: int = 0
    total_reviews: int = 0
    avg_rating: float = 0.0
    revenue_data: list[DailyRevenue] = field(default_factory=list)
    recent_orders: list[RecentOrder] = field(default_factory=list)
    recent_reviews: list[RecentReview] = field(default_factory=list)


class DashboardService:
    """Agrege commandes, vouchers, soins et avis pour le back-office."""

    def __init__(
        self,
        order_repo: IOrderRepository,
        voucher_repo: IVoucherRepository,
        service_repo: IServiceRepository,
        review_repo: IReviewRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orders = order_repo
        self._vouchers = voucher_repo
        self._services = service_repo
        self._reviews = review_repo
        self._clock = clock

    def get_stats(self) -> DashboardStats:
        """
        Calcule les statistiques.

        Le chiffre d'affaires et la serie sur 7 jours ne comptent que les
        commandes PAID ; les vouchers sont comptes par statut effectif
        (un ACTIVE dont la date est passee compte comme EXPIRED).
        """
        today = self._clock().date()
        orders = self._orders.list_all()
        vouchers = self._vouchers.list_all()
        services = self._services.list_all()
        reviews = self._reviews.list_all()
        paid_orders = [o for o in orders if o.is_paid]

        by_status = {status: 0 for status in VoucherStatus}
        for voucher in vouchers:
            by_status[voucher.effective_status(today)] += 1

        revenue_data = []
        for offset in range(REVENUE_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            day_orders = [o for o in paid_orders if o.created_at and o.created_at.date() == day]
            revenue_data.append(
                DailyRevenue(
                    day=WEEKDAY_ABBREVIATIONS[day.weekday()],
                    revenue=sum(o.total_amount for o in day_orders),
                    orders=len(day_orders),
                )
            )

        service_names = {s.id: s.name for s in services}
        recent_orders = [
            RecentOrder(
                id=o.id,
                customer_name=o.customer_name,
                service_name=service_names.get(o.service_id, "Service"),
                total_amount=o.total_amount,
                payment_status=o.payment_status.value,
                created_at=o.created_at,
            )
            for o in orders[:RECENT_ORDERS_LIMIT]
        ]
        recent_reviews = [
            RecentReview(
                id=r.id,
                rating=r.rating,
                comment=r.comment,
                customer_name=r.customer_name,
            )
            for r in reviews[:RECENT_REVIEWS_LIMIT]
        ]

        return DashboardStats(
            total_revenue=sum(o.total_amount for o in paid_orders),
            active_vouchers=by_status[VoucherStatus.ACTIVE],
            redeemed_vouchers=by_status[VoucherStatus.REDEEMED],
            expired_vouchers=by_status[VoucherStatus.EXPIRED],
            total_orders=len(orders),
            total_services=len(services),
            total_vouchers=len(vouchers),
            total_reviews=len(reviews),
            avg_rating=self._reviews.average_rating(),
            revenue_data=revenue_data,
            recent_orders=recent_orders,
            recent_reviews=recent_reviews,
        )
