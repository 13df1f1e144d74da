import pytest
from helpers import auth, make_user

from travelmart.models.audit_log import AuditLog
from travelmart.models.notification import Notification
from travelmart.models.provider_request import ProviderRequest
from travelmart.models.user import User


def request_body(**overrides) -> dict:
    body = {
        "providerType": "hotel",
        "firstName": "Ali",
        "lastName": "Khan",
        "businessName": "Khan Guest House",
        "businessPhone": "+923001112223",
        "businessEmail": "Stay@KhanGH.pk",
        "details": {"rooms": 12},
    }
    body.update(overrides)
    return body


@pytest.fixture
def submitted(client, customer, admin):
    resp = client.post("/api/v1/provider-requests", json=request_body(), headers=auth(customer))
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["id"]


class TestSubmitProviderRequest:

    def test_submit_creates_pending_request(self, client, db, customer, submitted):
        r = db.get(ProviderRequest, submitted)
        assert r.status == "pending"
        assert r.user_id == customer.id
        assert r.business_email == "stay@khangh.pk"
        assert r.details == {"rooms": 12}

    def test_admins_notified(self, client, db, admin, submitted):
        sent = db.query(Notification).filter(Notification.user_id == admin.id).all()
        assert [n.type for n in sent] == ["provider_request_submitted"]
        assert sent[0].data["requestId"] == submitted

    def test_missing_fields_named(self, client, customer):
        resp = client.post("/api/v1/provider-requests", json={"providerType": "hotel", "firstName": " "},
                           headers=auth(customer))
        assert resp.status_code == 400
        assert set(resp.json()["fields"]) == {"firstName", "lastName", "businessName", "businessPhone"}

    def test_unknown_provider_type(self, client, customer):
        resp = client.post("/api/v1/provider-requests", json=request_body(providerType="airline"),
                           headers=auth(customer))
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["providerType"]

    def test_one_open_request_per_type(self, client, db, customer, submitted):
        again = client.post("/api/v1/provider-requests", json=request_body(), headers=auth(customer))
        assert again.status_code == 400
        other_type = client.post("/api/v1/provider-requests", json=request_body(providerType="tour"),
                                 headers=auth(customer))
        assert other_type.status_code == 201
        assert db.query(ProviderRequest).filter(ProviderRequest.user_id == customer.id).count() == 2

    def test_admin_cannot_submit(self, client, admin):
        resp = client.post("/api/v1/provider-requests", json=request_body(), headers=auth(admin))
        assert resp.status_code == 403

    def test_own_requests_only(self, client, db, customer, submitted):
        stranger = make_user(db, "customer")
        mine = client.get("/api/v1/provider-requests/me", headers=auth(customer)).json()
        assert [r["id"] for r in mine["data"]] == [submitted]
        assert client.get("/api/v1/provider-requests/me", headers=auth(stranger)).json()["count"] == 0


class TestReviewProviderRequest:

    def test_admin_lists_and_filters(self, client, admin, submitted):
        listed = client.get("/api/v1/admin/provider-requests", headers=auth(admin)).json()
        assert listed["count"] == 1
        assert listed["data"][0]["status"] == "pending"
        approved = client.get("/api/v1/admin/provider-requests", params={"status": "approved"},
                              headers=auth(admin)).json()
        assert approved["count"] == 0
        bad = client.get("/api/v1/admin/provider-requests", params={"status": "done"}, headers=auth(admin))
        assert bad.status_code == 400

    def test_customer_cannot_review(self, client, customer, submitted):
        assert client.get("/api/v1/admin/provider-requests", headers=auth(customer)).status_code == 403
        resp = client.post(f"/api/v1/admin/provider-requests/{submitted}/approve", headers=auth(customer))
        assert resp.status_code == 403

    def test_approve_promotes_and_notifies(self, client, db, customer, admin, submitted):
        resp = client.post(f"/api/v1/admin/provider-requests/{submitted}/approve", headers=auth(admin))
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "approved"
        assert data["reviewedBy"] == admin.id

        db.expire_all()
        assert db.get(User, customer.id).role == "provider"
        types = [n.type for n in db.query(Notification).filter(Notification.user_id == customer.id).all()]
        assert types == ["provider_request_approved"]
        assert db.query(AuditLog).filter(AuditLog.action == "provider_request_approved").count() == 1

        # the promoted account can now list services
        created = client.post("/api/v1/provider/services", json={"name": "Khan Guest House", "type": "hotel",
                                                                 "price": 3000}, headers=auth(customer))
        assert created.status_code == 201

    def test_reject_requires_reason(self, client, db, customer, admin, submitted):
        resp = client.post(f"/api/v1/admin/provider-requests/{submitted}/reject", json={"reason": " "},
                           headers=auth(admin))
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["reason"]
        assert db.get(ProviderRequest, submitted).status == "pending"

    def test_reject_keeps_role_and_notifies(self, client, db, customer, admin, submitted):
        resp = client.post(f"/api/v1/admin/provider-requests/{submitted}/reject",
                           json={"reason": "Licence copy missing"}, headers=auth(admin))
        assert resp.status_code == 200
        assert resp.json()["data"]["rejectionReason"] == "Licence copy missing"

        db.expire_all()
        assert db.get(User, customer.id).role == "customer"
        sent = db.query(Notification).filter(Notification.user_id == customer.id).one()
        assert sent.type == "provider_request_rejected"
        assert sent.data["rejectionReason"] == "Licence copy missing"

    def test_rejected_type_can_be_reapplied(self, client, customer, admin, submitted):
        client.post(f"/api/v1/admin/provider-requests/{submitted}/reject", json={"reason": "Blurry CNIC"},
                    headers=auth(admin))
        again = client.post("/api/v1/provider-requests", json=request_body(), headers=auth(customer))
        assert again.status_code == 201

    def test_decision_is_final(self, client, admin, submitted):
        client.post(f"/api/v1/admin/provider-requests/{submitted}/approve", headers=auth(admin))
        resp = client.post(f"/api/v1/admin/provider-requests/{submitted}/reject", json={"reason": "Changed mind"},
                           headers=auth(admin))
        assert resp.status_code == 400

    def test_unknown_request(self, client, admin):
        assert client.get("/api/v1/admin/provider-requests/nope", headers=auth(admin)).status_code == 404
        assert client.post("/api/v1/admin/provider-requests/nope/approve", headers=auth(admin)).status_code == 404
