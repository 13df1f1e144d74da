import re
import types

import pytest

from travelmart.core.errors import ValidationError
from travelmart.services.status_service import apply_status, generate_confirmation_number


def reservation(**kw):
    base = dict(status="pending", confirmation_number=None, rejection_reason=None, response_date=None)
    base.update(kw)
    return types.SimpleNamespace(**base)


class TestConfirmationNumber:

    def test_service_prefix_format(self):
        assert re.fullmatch(r"TR\d+[A-Z0-9]{4}", generate_confirmation_number("TR"))

    def test_vehicle_prefix_format(self):
        assert re.fullmatch(r"VH\d{13,}[A-Z0-9]{4}", generate_confirmation_number("VH"))


class TestApplyStatus:

    def test_confirm_assigns_number_and_response_date(self):
        r = apply_status(reservation(), "confirmed", "TR")
        assert r.status == "confirmed"
        assert re.fullmatch(r"TR\d+[A-Z0-9]{4}", r.confirmation_number)
        assert r.response_date is not None

    def test_confirm_twice_keeps_number(self):
        r = apply_status(reservation(), "confirmed", "TR")
        first = r.confirmation_number
        apply_status(r, "confirmed", "TR")
        assert r.confirmation_number == first

    def test_cancel_stores_reason(self):
        r = apply_status(reservation(), "cancelled", "TR", "Fully booked")
        assert r.status == "cancelled"
        assert r.rejection_reason == "Fully booked"

    def test_cancel_without_reason_keeps_previous_reason(self):
        r = reservation(status="cancelled", rejection_reason="Fully booked")
        apply_status(r, "cancelled", "TR")
        assert r.rejection_reason == "Fully booked"

    def test_confirmed_can_be_cancelled_and_reconfirmed(self):
        r = apply_status(reservation(), "confirmed", "VH")
        number = r.confirmation_number
        apply_status(r, "cancelled", "VH", "Vehicle broke down")
        apply_status(r, "confirmed", "VH")
        assert r.status == "confirmed"
        assert r.confirmation_number == number
        assert r.rejection_reason == "Vehicle broke down"

    def test_confirm_does_not_touch_reason(self):
        r = apply_status(reservation(rejection_reason="old"), "confirmed", "TR")
        assert r.rejection_reason == "old"

    @pytest.mark.parametrize("target", ["pending", "completed", "approved", None])
    def test_other_targets_rejected(self, target):
        r = reservation()
        with pytest.raises(ValidationError):
            apply_status(r, target, "TR")
        assert r.status == "pending"
        assert r.response_date is None

    def test_number_factory_is_used(self):
        r = apply_status(reservation(), "confirmed", "TR", make_number=lambda: "TR1X")
        assert r.confirmation_number == "TR1X"
