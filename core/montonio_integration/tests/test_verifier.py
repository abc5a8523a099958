from django.test import SimpleTestCase

from core.montonio_integration.exceptions import (
    MalformedClaimError,
    MissingParameterError,
    TokenDecodeError,
)
from core.montonio_integration.verifier import (
    CallbackParams,
    verify_callback,
)

from .helpers import make_config, make_token


class FakeLedger:
    """In-memory ledger with the same idempotent update semantics."""

    def __init__(self, **statuses):
        self.statuses = dict(statuses)
        self.calls = []

    def update_status(self, payment_id, status):
        self.calls.append((payment_id, status))
        if self.statuses.get(payment_id) == status:
            return False
        self.statuses[payment_id] = status
        return True


def params(token=None, payment_id="42", form_id="7", **extra):
    data = {"payment_token": make_token() if token is None else token, "id": payment_id, "give-form-id": form_id}
    data.update(extra)
    return CallbackParams.from_data(data)


class CallbackParamsTests(SimpleTestCase):
    def test_order_token_alias(self):
        p = CallbackParams.from_data({"order-token": "abc", "id": "1", "give-form-id": "2"})
        self.assertEqual(p.payment_token, "abc")

    def test_payment_token_wins_over_alias(self):
        p = CallbackParams.from_data({"payment_token": "a", "order-token": "b"})
        self.assertEqual(p.payment_token, "a")

    def test_missing_reports_every_absent_parameter(self):
        p = CallbackParams.from_data({"id": "  "})
        self.assertEqual(p.missing(), ["payment_token", "id", "give-form-id"])

    def test_list_values_use_last_item(self):
        p = CallbackParams.from_data({"id": ["1", "2"]})
        self.assertEqual(p.payment_id, "2")

    def test_empty_payment_token_is_kept_over_alias(self):
        p = CallbackParams.from_data({"payment_token": "", "order-token": "b", "id": "1", "give-form-id": "2"})
        self.assertEqual(p.payment_token, "")
        self.assertEqual(p.missing(), ["payment_token"])

    def test_zero_counts_as_missing(self):
        p = CallbackParams.from_data({"payment_token": "0", "id": "0", "give-form-id": "0"})
        self.assertEqual(p.missing(), ["payment_token", "id", "give-form-id"])

    def test_zero_prefixed_ids_are_present(self):
        p = CallbackParams.from_data({"payment_token": "t", "id": "00", "give-form-id": "0.0"})
        self.assertEqual(p.missing(), [])


class VerifyCallbackTests(SimpleTestCase):
    def setUp(self):
        self.config = make_config()
        self.ledger = FakeLedger(**{"42": "pending"})

    def test_all_checks_pass_marks_paid(self):
        outcome = verify_callback(params(), self.config, self.ledger)

        self.assertEqual(outcome.status, "publish")
        self.assertEqual(outcome.redirect_url, self.config.success_url)
        self.assertEqual(self.ledger.calls, [("42", "publish")])
        self.assertEqual(self.ledger.statuses["42"], "publish")

    def test_cancelled_status_marks_abandoned(self):
        token = make_token(payment_status="CANCELLED")
        outcome = verify_callback(params(token), self.config, self.ledger)

        self.assertEqual(outcome.status, "abandoned")
        self.assertEqual(outcome.redirect_url, self.config.failure_url)
        self.assertFalse(outcome.checks["payment_status_paid"])
        self.assertEqual(self.ledger.calls, [("42", "abandoned")])

    def test_wrong_access_key_marks_abandoned(self):
        token = make_token(accessKey="someone-else")
        outcome = verify_callback(params(token), self.config, self.ledger)

        self.assertEqual(outcome.status, "abandoned")
        self.assertFalse(outcome.checks["access_key_match"])
        self.assertTrue(outcome.checks["merchant_reference_match"])

    def test_wrong_reference_marks_abandoned(self):
        token = make_token(merchant_reference="43")
        outcome = verify_callback(params(token), self.config, self.ledger)

        self.assertEqual(outcome.status, "abandoned")
        self.assertFalse(outcome.checks["merchant_reference_match"])
        # the donation named in the request is the one abandoned
        self.assertEqual(self.ledger.calls, [("42", "abandoned")])

    def test_status_comparison_is_exact(self):
        token = make_token(payment_status="paid")
        outcome = verify_callback(params(token), self.config, self.ledger)
        self.assertEqual(outcome.status, "abandoned")

    def test_missing_parameters_do_not_touch_ledger(self):
        for missing in ("payment_token", "id", "give-form-id"):
            data = {"payment_token": make_token(), "id": "42", "give-form-id": "7"}
            data[missing] = ""
            with self.subTest(missing=missing):
                with self.assertRaises(MissingParameterError) as ctx:
                    verify_callback(CallbackParams.from_data(data), self.config, self.ledger)
                self.assertEqual(ctx.exception.missing, [missing])
        self.assertEqual(self.ledger.calls, [])

    def test_undecodable_token_does_not_touch_ledger(self):
        with self.assertRaises(TokenDecodeError):
            verify_callback(params("garbage"), self.config, self.ledger)
        self.assertEqual(self.ledger.calls, [])
        self.assertEqual(self.ledger.statuses["42"], "pending")

    def test_token_signed_with_other_secret_does_not_touch_ledger(self):
        token = make_token(secret="forged-secret-key-0123456789abcdefghij")
        with self.assertRaises(TokenDecodeError):
            verify_callback(params(token), self.config, self.ledger)
        self.assertEqual(self.ledger.calls, [])

    def test_malformed_claims_do_not_touch_ledger(self):
        token = make_token(merchant_reference=None)
        with self.assertRaises(MalformedClaimError):
            verify_callback(params(token), self.config, self.ledger)
        self.assertEqual(self.ledger.calls, [])

    def test_replayed_paid_callback_converges(self):
        first = verify_callback(params(), self.config, self.ledger)
        second = verify_callback(params(), self.config, self.ledger)

        self.assertEqual(first.status, second.status)
        self.assertEqual(self.ledger.statuses, {"42": "publish"})

    def test_outcome_is_logged_once_with_decoded_claim(self):
        for token, word in ((make_token(), "successful"), (make_token(payment_status="CANCELLED"), "abandoned")):
            with self.subTest(outcome=word):
                with self.assertLogs("core.montonio_integration.verifier", level="INFO") as logs:
                    verify_callback(params(token), self.config, self.ledger)

                self.assertEqual(len(logs.records), 1)
                message = logs.records[0].getMessage()
                self.assertIn(word, message)
                self.assertIn("merchant_reference=42", message)
                self.assertIn("payment_status=", message)
                self.assertNotIn(self.config.access_key, message)
                self.assertNotIn(self.config.secret_key, message)
