import uuid
from datetime import datetime, timedelta, timezone

import pytest
from helpers import CHECK_IN, CHECK_OUT, auth, make_user

from travelmart.core.errors import ValidationError
from travelmart.models.service_reservation import ServiceReservation
from travelmart.models.vehicle_reservation import VehicleReservation
from travelmart.models.restaurant_reservation import RestaurantReservation
from travelmart.models.tour_reservation import TourReservation
from travelmart.services.aggregation_service import dashboard_stats, list_reservations
from travelmart.services.reservation_stores import format_details

BASE = datetime(2029, 6, 1, tzinfo=timezone.utc)


def add_service_res(db, service, customer, status="pending", created=None):
    r = ServiceReservation(
        id=str(uuid.uuid4()), customer_id=customer.id, service_id=service.id, provider_id=service.provider_id,
        check_in_date=BASE, check_out_date=BASE + timedelta(days=2), guests=2, rooms=1,
        customer_name=customer.name, customer_email=customer.email, customer_phone="1", cnic_number="1",
        price_per_unit=service.price, total_amount=service.price * 2, status=status,
        created_at=created or datetime.now(timezone.utc),
    )
    db.add(r)
    db.commit()
    return r


def add_vehicle_res(db, vehicle, customer, status="pending", created=None):
    r = VehicleReservation(
        id=str(uuid.uuid4()), user_id=customer.id, vehicle_id=vehicle.id, vehicle_owner_id=vehicle.owner_id,
        pickup_date=BASE, return_date=BASE + timedelta(days=3), daily_rate=vehicle.price,
        price=vehicle.price * 3, transaction_id=str(uuid.uuid4()), status=status,
        created_at=created or datetime.now(timezone.utc),
    )
    db.add(r)
    db.commit()
    return r


def add_tour_res(db, tour, customer, status="pending", created=None):
    r = TourReservation(
        id=str(uuid.uuid4()), customer_id=customer.id, tour_id=tour.id, tour_owner_id=tour.owner_id,
        customer_name=customer.name, customer_email=customer.email, customer_phone="1", tour_name=tour.name,
        tour_date=BASE, guests=2, tour_price=tour.price, total_amount=tour.price * 2, status=status,
        created_at=created or datetime.now(timezone.utc),
    )
    db.add(r)
    db.commit()
    return r


def add_restaurant_res(db, restaurant, customer, status="pending", created=None):
    r = RestaurantReservation(
        id=str(uuid.uuid4()), user_id=customer.id, restaurant_id=restaurant.id,
        restaurant_owner_id=restaurant.owner_id, reservation_date=BASE, guests=2,
        customer_name=customer.name, customer_email=customer.email, customer_phone="1",
        price_per_guest=restaurant.price, total_amount=restaurant.price * 2, status=status,
        created_at=created or datetime.now(timezone.utc),
    )
    db.add(r)
    db.commit()
    return r


@pytest.fixture
def mixed(db, customer, hotel, tour, vehicle, restaurant):
    """Two reservations per store with alternating statuses and distinct creation times."""
    t0 = datetime(2029, 1, 1, tzinfo=timezone.utc)
    made = []
    for i, (add, item) in enumerate([
        (add_service_res, hotel), (add_tour_res, tour), (add_vehicle_res, vehicle), (add_restaurant_res, restaurant),
    ]):
        made.append(add(db, item, customer, "pending", t0 + timedelta(hours=2 * i)))
        made.append(add(db, item, customer, "confirmed", t0 + timedelta(hours=2 * i + 1)))
    return made


class TestListReservations:

    def test_vehicle_pending_only(self, db, provider, mixed):
        result = list_reservations(db, provider, "provider", status="pending", type_="vehicle")
        assert result["total"] == 1
        assert all(r["type"] == "vehicle" and r["status"] == "pending" for r in result["items"])

    def test_vehicle_pending_over_http(self, client, provider, mixed):
        resp = client.get("/api/v1/provider/reservations", params={"type": "vehicle", "status": "pending"},
                          headers=auth(provider))
        body = resp.json()
        assert body["success"] is True
        assert body["total"] == 1
        assert [r["type"] for r in body["data"]] == ["vehicle"]

    def test_status_filter_across_stores(self, db, admin, mixed):
        result = list_reservations(db, admin, "admin", status="confirmed")
        assert result["total"] == 4
        assert {r["status"] for r in result["items"]} == {"confirmed"}
        assert {r["type"] for r in result["items"]} == {"service", "tour", "vehicle", "restaurant"}

    def test_newest_first(self, db, admin, mixed):
        items = list_reservations(db, admin, "admin")["items"]
        created = [r["createdAt"] for r in items]
        assert created == sorted(created, reverse=True)
        assert items[0]["type"] == "restaurant"

    def test_ties_broken_by_id(self, db, admin, customer, hotel):
        same = datetime(2029, 3, 3, tzinfo=timezone.utc)
        ids = sorted(add_service_res(db, hotel, customer, created=same).id for _ in range(3))
        items = list_reservations(db, admin, "admin")["items"]
        assert [r["id"] for r in items] == list(reversed(ids))

    def test_pagination(self, db, admin, mixed):
        first = list_reservations(db, admin, "admin", page=1, limit=3)
        last = list_reservations(db, admin, "admin", page=3, limit=3)
        assert len(first["items"]) == 3
        assert len(last["items"]) == 2
        assert first["total"] == 8
        assert first["totalPages"] == 3
        assert list_reservations(db, admin, "admin", page=4, limit=3)["items"] == []

    def test_dangling_references_skipped(self, db, admin, customer, hotel, vehicle, mixed):
        orphan_customer = make_user(db, "customer")
        add_vehicle_res(db, vehicle, orphan_customer)
        db.delete(orphan_customer)
        db.delete(hotel)
        db.commit()
        result = list_reservations(db, admin, "admin")
        # both hotel reservations and the vehicle rental of the deleted user drop out
        assert result["total"] == 6
        assert len(result["items"]) == 6

    def test_provider_sees_only_owned(self, db, other_provider, mixed):
        assert list_reservations(db, other_provider, "provider")["total"] == 0

    def test_customer_scope(self, db, customer, mixed):
        stranger = make_user(db, "customer")
        assert list_reservations(db, customer, "customer")["total"] == 8
        assert list_reservations(db, stranger, "customer")["total"] == 0

    def test_customer_tour_matched_by_email(self, db, customer, tour):
        r = add_tour_res(db, tour, customer)
        r.customer_id = customer.email
        db.commit()
        assert list_reservations(db, customer, "customer", type_="tour")["total"] == 1

    def test_customer_listing_over_http(self, client, customer, mixed):
        resp = client.get("/api/v1/reservations/me", params={"limit": 5}, headers=auth(customer))
        body = resp.json()
        assert body["count"] == 5
        assert body["total"] == 8

    @pytest.mark.parametrize("kwargs", [
        {"status": "approved"}, {"type_": "train"}, {"page": 0}, {"limit": 0}, {"limit": 101},
    ])
    def test_bad_filters(self, db, admin, kwargs):
        with pytest.raises(ValidationError):
            list_reservations(db, admin, "admin", **kwargs)

    def test_normalized_record_shape(self, db, admin, mixed):
        for r in list_reservations(db, admin, "admin")["items"]:
            for key in ("id", "type", "customerName", "customerEmail", "status", "createdAt", "totalAmount",
                        "serviceTypeLabel", "formattedDetails", "displayDetails"):
                assert r[key] not in (None, ""), key

    def test_dashboard(self, db, admin, mixed):
        stats = dashboard_stats(db)
        assert stats["reservations"]["total"] == 8
        assert stats["reservations"]["byStatus"]["confirmed"] == 4
        assert stats["reservations"]["byType"]["vehicle"]["pending"] == 1
        assert stats["users"]["providers"] == 1


class TestFormatDetails:

    def test_hotel(self):
        assert format_details("hotel", guests=2, rooms=1, room_type="Deluxe") == (
            "Hotel Reservation", "Guests: 2, Rooms: 1, Type: Deluxe")

    def test_vehicle(self):
        assert format_details("vehicle", days=3, vehicle="SUV") == ("Vehicle Rental", "Duration: 3 day(s), Vehicle: SUV")

    def test_event(self):
        assert format_details("event", guests=5, event_type="Wedding") == ("Event Booking", "Guests: 5, Event: Wedding")

    def test_unknown_type(self):
        assert format_details("spa", guests=2, rooms=3) == ("Service Reservation", "Guests: 2, Units: 3")
