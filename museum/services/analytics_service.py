# museum/services/analytics_service.py
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from museum.data.models.cart import CartModel
from museum.data.models.order import OrderModel
from museum.data.models.order_item import OrderItemModel
from museum.data.models.tour_registration import TourRegistrationModel
from museum.domain.slots import remaining_capacity, slot_capacity
from museum.repos.tour_repo import TourRepo

TOP_PRODUCTS_LIMIT = 5
RECENT_ORDERS_LIMIT = 6


class AnalyticsService:
    """
    Raporty dla panelu admina, tylko odczyt.
    Liczone przy kazdym zapytaniu, bez cache.
    """

    def __init__(self, db: Session):
        self.db = db
        self.tours = TourRepo(db)

    def dashboard(self, today: date | None = None) -> Dict[str, Any]:
        today = today or date.today()

        return {
            "cards": self._cards(today),
            "top_products": self._top_products(),
            "recent_orders": self._recent_orders(),
            "upcoming_tour_dates": self._upcoming_tour_dates(today),
        }

    def _scalar(self, stmt) -> Any:
        return self.db.execute(stmt).scalar_one()

    def _cards(self, today: date) -> Dict[str, Any]:
        revenue = self._scalar(select(func.coalesce(func.sum(OrderModel.grand_total), 0)))

        return {
            "total_revenue": Decimal(str(revenue)),
            "total_orders": self._scalar(select(func.count(OrderModel.id))),
            "pending_orders": self._scalar(
                select(func.count(OrderModel.id)).where(OrderModel.status == "pending")
            ),
            "unique_customers": self._scalar(select(func.count(distinct(OrderModel.email)))),
            "active_carts": self._scalar(
                select(func.count(CartModel.id)).where(CartModel.items_count > 0)
            ),
            "total_tour_registrations": self._scalar(select(func.count(TourRegistrationModel.id))),
            "tours_today": self._scalar(
                select(func.count(TourRegistrationModel.id)).where(
                    TourRegistrationModel.preferred_date == today
                )
            ),
            "upcoming_tours": self._scalar(
                select(func.count(TourRegistrationModel.id)).where(
                    TourRegistrationModel.preferred_date >= today
                )
            ),
        }

    def _top_products(self) -> List[Dict[str, Any]]:
        total_quantity = func.sum(OrderItemModel.quantity).label("total_quantity")
        total_sales = func.sum(OrderItemModel.line_total).label("total_sales")

        rows = self.db.execute(
            select(
                OrderItemModel.product_id,
                OrderItemModel.product_name,
                total_quantity,
                total_sales,
            )
            .group_by(OrderItemModel.product_id, OrderItemModel.product_name)
            .order_by(total_quantity.desc(), OrderItemModel.product_name)
            .limit(TOP_PRODUCTS_LIMIT)
        ).all()

        return [
            {
                "product_id": r.product_id,
                "product_name": r.product_name,
                "total_quantity": int(r.total_quantity),
                "total_sales": Decimal(str(r.total_sales)),
            }
            for r in rows
        ]

    def _recent_orders(self) -> List[Dict[str, Any]]:
        orders = self.db.execute(
            select(OrderModel)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .limit(RECENT_ORDERS_LIMIT)
        ).scalars().all()

        return [
            {
                "order_number": o.order_number,
                "customer_name": o.customer_name,
                "email": o.email,
                "status": o.status,
                "payment_status": o.payment_status,
                "grand_total": o.grand_total,
                "created_at": o.created_at,
            }
            for o in orders
        ]

    def _upcoming_tour_dates(self, today: date) -> List[Dict[str, Any]]:
        visitors = func.sum(
            TourRegistrationModel.adults_count + TourRegistrationModel.students_count
        )
        rows = self.db.execute(
            select(
                TourRegistrationModel.preferred_date,
                func.count(TourRegistrationModel.id),
                visitors,
            )
            .where(TourRegistrationModel.preferred_date >= today)
            .group_by(TourRegistrationModel.preferred_date)
            .order_by(TourRegistrationModel.preferred_date)
        ).all()

        return [
            {"date": day, "registrations": int(count), "visitors": int(total or 0)}
            for day, count, total in rows
        ]

    def tour_report(
        self,
        on: date | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Dict[str, Any]:
        """Zgloszenia pogrupowane po dniu i slocie, z obsadzeniem slotu."""
        registrations = self.tours.list_registrations(on=on, date_from=date_from, date_to=date_to)

        days: "OrderedDict[date, OrderedDict[str, list]]" = OrderedDict()
        for registration in registrations:
            slots = days.setdefault(registration.preferred_date, OrderedDict())
            slots.setdefault(registration.preferred_slot, []).append(registration)

        data = []
        for day, slots in days.items():
            slot_reports = []
            for slot, slot_registrations in sorted(slots.items()):
                booked = sum(r.visitors_count for r in slot_registrations)
                capacity = slot_capacity(slot)
                slot_reports.append(
                    {
                        "slot": slot,
                        "capacity": capacity,
                        "booked_visitors": booked,
                        "remaining_capacity": remaining_capacity(capacity, booked),
                        "registrations": slot_registrations,
                    }
                )
            data.append(
                {
                    "date": day,
                    "total_visitors": sum(s["booked_visitors"] for s in slot_reports),
                    "slots": slot_reports,
                }
            )

        return {
            "data": data,
            "meta": {
                "total_days": len(data),
                "total_registrations": len(registrations),
                "total_visitors": sum(r.visitors_count for r in registrations),
            },
        }
