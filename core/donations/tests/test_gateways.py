from unittest import mock

from django.contrib import admin
from django.http import HttpResponse
from django.test import SimpleTestCase, TestCase

from core.donations import gateways
from core.donations.admin import DonationAdmin
from core.donations.gateways import (
    PaymentGateway,
    get_gateway,
    get_gateways,
    register_gateway,
)
from core.donations.models import Donation, DonationForm


class GatewayRegistryTests(SimpleTestCase):
    def setUp(self):
        patcher = mock.patch.dict(gateways._registry)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_register_and_lookup(self):
        gateway = register_gateway(PaymentGateway("test", "Test", "Test checkout"))

        self.assertIs(get_gateway("test"), gateway)
        self.assertIn(gateway, get_gateways())

    def test_registering_again_replaces(self):
        register_gateway(PaymentGateway("test", "Old", "Old"))
        register_gateway(PaymentGateway("test", "New", "New"))

        self.assertEqual(get_gateway("test").admin_label, "New")
        self.assertEqual([g.key for g in get_gateways()].count("test"), 1)

    def test_empty_key(self):
        self.assertIsNone(get_gateway(None))
        self.assertIsNone(get_gateway(""))


class GatewayViewsTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.form = DonationForm.objects.create(title="Spring campaign")

    def setUp(self):
        patcher = mock.patch.dict(gateways._registry)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_listener_dispatch(self):
        register_gateway(
            PaymentGateway("test", "Test", "Test", listener=lambda request: HttpResponse("handled"))
        )

        response = self.client.get("/", {"give-listener": "test"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"handled")

    def test_gateway_without_listener_is_404(self):
        register_gateway(PaymentGateway("test", "Test", "Test"))
        response = self.client.get("/", {"give-listener": "test"})
        self.assertEqual(response.status_code, 404)

    def test_form_gateways_list_montonio(self):
        response = self.client.get(f"/api/donations/forms/{self.form.pk}/gateways/")

        self.assertEqual(response.status_code, 200)
        gateways = {g["id"]: g for g in response.json()["gateways"]}
        self.assertIn("montonio", gateways)
        self.assertEqual(gateways["montonio"]["label"], "Montonio")
        self.assertIn("Donate with Montonio", gateways["montonio"]["form_html"])

    def test_inactive_form_is_404(self):
        self.form.is_active = False
        self.form.save()
        response = self.client.get(f"/api/donations/forms/{self.form.pk}/gateways/")
        self.assertEqual(response.status_code, 404)


class DonationAdminTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.form = DonationForm.objects.create(title="Spring campaign")

    def setUp(self):
        self.model_admin = DonationAdmin(Donation, admin.site)

    def donation(self, gateway):
        return Donation.objects.create(
            form=self.form,
            amount="5.00",
            email="donor@example.org",
            gateway=gateway,
            purchase_key=Donation.generate_purchase_key(),
        )

    def test_gateway_column_uses_admin_label(self):
        with mock.patch.dict(
            gateways._registry, {"test": PaymentGateway("test", "Test (admin)", "Test")}
        ):
            self.assertEqual(self.model_admin.gateway_label(self.donation("test")), "Test (admin)")

    def test_unknown_gateway_shows_key(self):
        self.assertEqual(self.model_admin.gateway_label(self.donation("legacy")), "legacy")
