import unittest

from groupme_relay.util.errors import (
    ExternalServiceError,
    ParseError,
    ProtocolError,
    ServiceError,
    ValidationError,
)


class ServiceErrorTest(unittest.TestCase):

    def test_to_log_string_without_cause(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong")

    def test_to_log_string_with_cause(self):
        try:
            try:
                raise ValueError("root cause")
            except ValueError as cause:
                raise ServiceError("Something went wrong", error_code = 42, emoji = "🫖") from cause
        except ServiceError as error:
            self.assertEqual(error.to_log_string(), "[🫖 E42] Something went wrong # Caused by: root cause")

    def test_str_equals_to_log_string(self):
        error = ServiceError("Something went wrong", error_code = 42, emoji = "🫖")

        self.assertEqual(str(error), error.to_log_string())


class SubclassDefaultsTest(unittest.TestCase):

    def test_validation_error(self):
        error = ValidationError("msg", error_code = 1)
        self.assertEqual(error.emoji, "✏️")

    def test_external_service_error(self):
        error = ExternalServiceError("msg", error_code = 5)
        self.assertEqual(error.emoji, "🌐")

    def test_parse_error(self):
        error = ParseError("msg", error_code = 1004)
        self.assertIsInstance(error, ValidationError)
        self.assertEqual(error.error_code, 1004)
        self.assertTrue(str(error).startswith("[🧩 E1004]"))

    def test_protocol_error_carries_expected_and_actual(self):
        error = ProtocolError("Expected 202, received: 500", error_code = 5001, expected = 202, actual = 500)
        self.assertIsInstance(error, ExternalServiceError)
        self.assertTrue(str(error).startswith("[📡 E5001]"))
        self.assertEqual(error.expected, 202)
        self.assertEqual(error.actual, 500)
        self.assertIn("202", str(error))
        self.assertIn("500", str(error))
