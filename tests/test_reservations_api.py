from helpers import CHECK_IN, CHECK_OUT, auth, hotel_booking_body, make_user

from travelmart.models.notification import Notification
from travelmart.models.service_reservation import ServiceReservation
from travelmart.models.tour_reservation import TourReservation


class TestCreateServiceReservation:

    def test_two_night_hotel_stay(self, client, customer, hotel):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id), headers=auth(customer))
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["totalAmount"] == 10000
        assert data["status"] == "pending"
        assert data["type"] == "service"
        assert data["serviceType"] == "hotel"
        assert data["confirmationNumber"] is None
        assert data["displayDetails"] == "Hotel Reservation - Guests: 2, Rooms: 1"

    def test_missing_phone_is_rejected_and_nothing_saved(self, client, db, customer, hotel):
        body = hotel_booking_body(hotel.id)
        del body["customerPhone"]
        resp = client.post("/api/v1/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "customerPhone" in resp.json()["message"]
        assert db.query(ServiceReservation).count() == 0

    def test_all_missing_fields_named(self, client, customer, hotel):
        resp = client.post("/api/v1/reservations", json={"serviceId": hotel.id}, headers=auth(customer))
        assert resp.status_code == 400
        assert set(resp.json()["fields"]) == {
            "checkInDate", "checkOutDate", "customerName", "customerEmail", "customerPhone", "cnicNumber",
        }

    def test_blank_string_counts_as_missing(self, client, customer, hotel):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id, customerName="  "),
                           headers=auth(customer))
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["customerName"]

    def test_inverted_dates_rejected(self, client, customer, hotel):
        body = hotel_booking_body(hotel.id, checkInDate=CHECK_OUT, checkOutDate=CHECK_IN)
        resp = client.post("/api/v1/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 400

    def test_same_day_rejected(self, client, customer, hotel):
        body = hotel_booking_body(hotel.id, checkOutDate=CHECK_IN)
        resp = client.post("/api/v1/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 400

    def test_malformed_date_is_a_400_envelope(self, client, customer, hotel):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id, checkInDate="tomorrow"),
                           headers=auth(customer))
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "checkInDate" in resp.json()["fields"]

    def test_inactive_service_not_found(self, client, db, customer, hotel):
        hotel.status = "inactive"
        db.commit()
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id), headers=auth(customer))
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    def test_unknown_service_not_found(self, client, customer):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body("nope"), headers=auth(customer))
        assert resp.status_code == 404

    def test_provider_and_admins_notified(self, client, db, customer, hotel, provider, admin):
        client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id), headers=auth(customer))
        to_provider = db.query(Notification).filter(Notification.user_id == provider.id).all()
        to_admin = db.query(Notification).filter(Notification.user_id == admin.id).all()
        assert [n.type for n in to_provider] == ["new_service_booking"]
        assert "Rs. 10,000" in to_provider[0].message
        assert to_admin[0].title == "New Service Booking (Admin)"

    def test_quantity_from_group_size(self, client, customer, hotel):
        body = hotel_booking_body(hotel.id, rooms=None, guests=None, groupSize=3)
        resp = client.post("/api/v1/reservations", json=body, headers=auth(customer))
        assert resp.json()["data"]["totalAmount"] == 5000 * 2 * 3

    def test_requires_customer_role(self, client, provider, hotel):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id), headers=auth(provider))
        assert resp.status_code == 403

    def test_requires_token(self, client, hotel):
        resp = client.post("/api/v1/reservations", json=hotel_booking_body(hotel.id))
        assert resp.status_code == 401


class TestLegacyBookings:

    def test_tour_booking_single_date(self, client, customer, tour):
        body = {"tourDate": CHECK_IN, "guests": 3, "customerName": "Ali Khan",
                "customerEmail": "ali@example.com", "customerPhone": "+923001112223"}
        resp = client.post(f"/api/v1/tours/{tour.id}/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["totalAmount"] == 24000
        assert data["checkInDate"] == data["checkOutDate"]
        assert data["formattedDetails"] == "Group Size: 3"

    def test_vehicle_booking_with_driver(self, client, customer, vehicle):
        body = {"pickupDate": CHECK_IN, "returnDate": CHECK_OUT, "needDriver": True}
        resp = client.post(f"/api/v1/vehicles/{vehicle.id}/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["totalAmount"] == 10000 * 2 + 3000 * 2
        assert data["customerEmail"] == "ali@example.com"
        assert data["formattedDetails"] == "Duration: 2 day(s), Vehicle: SUV"

    def test_vehicle_missing_dates(self, client, customer, vehicle):
        resp = client.post(f"/api/v1/vehicles/{vehicle.id}/reservations", json={}, headers=auth(customer))
        assert resp.status_code == 400
        assert set(resp.json()["fields"]) == {"pickupDate", "returnDate"}

    def test_restaurant_booking(self, client, customer, restaurant):
        body = {"reservationDate": CHECK_IN, "guests": 4, "tableNumber": 2, "customerName": "Ali Khan",
                "customerEmail": "ali@example.com", "customerPhone": "+923001112223"}
        resp = client.post(f"/api/v1/restaurants/{restaurant.id}/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["totalAmount"] == 2000
        assert data["displayDetails"] == "Restaurant Booking - Guests: 4, Table: 2"

    def test_restaurant_table_out_of_range(self, client, customer, restaurant):
        body = {"reservationDate": CHECK_IN, "tableNumber": 11, "customerName": "Ali Khan",
                "customerEmail": "ali@example.com", "customerPhone": "+923001112223"}
        resp = client.post(f"/api/v1/restaurants/{restaurant.id}/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 400

    def test_unapproved_restaurant_not_bookable(self, client, db, customer, restaurant):
        restaurant.status = "pending"
        db.commit()
        body = {"reservationDate": CHECK_IN, "customerName": "Ali Khan",
                "customerEmail": "ali@example.com", "customerPhone": "+923001112223"}
        resp = client.post(f"/api/v1/restaurants/{restaurant.id}/reservations", json=body, headers=auth(customer))
        assert resp.status_code == 404


class TestCustomerActions:

    def test_cancel_pending(self, client, db, customer, provider, book_hotel):
        rid = book_hotel()
        resp = client.post(f"/api/v1/reservations/service/{rid}/cancel", headers=auth(customer))
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "cancelled"
        types = [n.type for n in db.query(Notification).filter(Notification.user_id == provider.id).all()]
        assert "reservation_cancelled" in types

    def test_cancel_notifies_admins(self, client, db, customer, admin, book_hotel):
        rid = book_hotel()
        client.post(f"/api/v1/reservations/service/{rid}/cancel", headers=auth(customer))
        sent = db.query(Notification).filter(Notification.user_id == admin.id,
                                             Notification.type == "reservation_cancelled").all()
        assert len(sent) == 1
        assert sent[0].data["reservationId"] == rid
        assert sent[0].data["customerId"] == customer.id

    def test_cannot_cancel_confirmed(self, client, customer, provider, book_hotel):
        rid = book_hotel()
        client.put(f"/api/v1/provider/reservations/service/{rid}/status", json={"status": "confirmed"},
                   headers=auth(provider))
        resp = client.post(f"/api/v1/reservations/service/{rid}/cancel", headers=auth(customer))
        assert resp.status_code == 400

    def test_delete_pending_refused(self, client, db, customer, book_hotel):
        rid = book_hotel()
        resp = client.delete(f"/api/v1/reservations/service/{rid}", headers=auth(customer))
        assert resp.status_code == 400
        assert db.get(ServiceReservation, rid) is not None

    def test_delete_cancelled(self, client, db, customer, book_hotel):
        rid = book_hotel()
        client.post(f"/api/v1/reservations/service/{rid}/cancel", headers=auth(customer))
        resp = client.delete(f"/api/v1/reservations/service/{rid}", headers=auth(customer))
        assert resp.status_code == 200
        db.expire_all()
        assert db.get(ServiceReservation, rid) is None
        deleted = db.query(Notification).filter(Notification.user_id == customer.id,
                                                Notification.type == "booking_deleted").count()
        assert deleted == 1

    def test_delete_past_pending(self, client, customer, book_hotel):
        rid = book_hotel(checkInDate="2020-01-01T10:00:00+00:00", checkOutDate="2020-01-03T10:00:00+00:00")
        resp = client.delete(f"/api/v1/reservations/service/{rid}", headers=auth(customer))
        assert resp.status_code == 200

    def test_other_customer_cannot_delete(self, client, db, book_hotel):
        rid = book_hotel()
        stranger = make_user(db, "customer")
        resp = client.delete(f"/api/v1/reservations/service/{rid}", headers=auth(stranger))
        assert resp.status_code == 404

    def test_details_visible_to_owner_and_provider_only(self, client, db, customer, provider, other_provider, book_hotel):
        rid = book_hotel()
        assert client.get(f"/api/v1/reservations/service/{rid}", headers=auth(customer)).status_code == 200
        assert client.get(f"/api/v1/reservations/service/{rid}", headers=auth(provider)).status_code == 200
        assert client.get(f"/api/v1/reservations/service/{rid}", headers=auth(other_provider)).status_code == 403

    def test_unknown_type(self, client, customer):
        resp = client.get("/api/v1/reservations/train/abc", headers=auth(customer))
        assert resp.status_code == 400


class TestTourBookingOwnership:

    def test_contact_email_does_not_grant_access(self, client, db, customer, tour):
        victim = make_user(db, "customer", "sana@example.com", "Sana")
        body = {"tourDate": CHECK_IN, "customerName": "Ali Khan",
                "customerEmail": victim.email, "customerPhone": "+923001112223"}
        rid = client.post(f"/api/v1/tours/{tour.id}/reservations", json=body,
                          headers=auth(customer)).json()["data"]["id"]

        assert client.post(f"/api/v1/reservations/tour/{rid}/cancel", headers=auth(victim)).status_code == 404
        assert client.delete(f"/api/v1/reservations/tour/{rid}", headers=auth(victim)).status_code == 404
        assert client.get("/api/v1/reservations/me", headers=auth(victim)).json()["total"] == 0

        db.expire_all()
        row = db.get(TourReservation, rid)
        assert row.status == "pending"
        assert client.post(f"/api/v1/reservations/tour/{rid}/cancel", headers=auth(customer)).status_code == 200

    def test_booking_stored_under_account_email_is_the_customers(self, client, db, customer, tour):
        body = {"tourDate": CHECK_IN, "customerName": "Ali Khan",
                "customerEmail": "someone.else@example.com", "customerPhone": "+923001112223"}
        rid = client.post(f"/api/v1/tours/{tour.id}/reservations", json=body,
                          headers=auth(customer)).json()["data"]["id"]
        row = db.get(TourReservation, rid)
        row.customer_id = customer.email
        db.commit()
        assert client.post(f"/api/v1/reservations/tour/{rid}/cancel", headers=auth(customer)).status_code == 200
