import pytest
from uuid import UUID

from flat_payments_backend.common.exceptions import InvalidFormatError, InvalidInputError
from flat_payments_backend.models import payment as payment_models
from flat_payments_backend.models import payment_type as payment_type_models
from flat_payments_backend.services.validation import validate_command, validate_id

from tests.constants import MALFORMED_IDS, TEST_FLAT_ID


class TestValidateId:

    def test_accepts_canonical_lowercase(self):
        assert validate_id(str(TEST_FLAT_ID)) == TEST_FLAT_ID

    def test_accepts_uppercase_hex(self):
        assert validate_id(str(TEST_FLAT_ID).upper()) == TEST_FLAT_ID

    def test_passes_uuid_instances_through(self):
        assert validate_id(TEST_FLAT_ID) is TEST_FLAT_ID

    @pytest.mark.parametrize("value", MALFORMED_IDS)
    def test_rejects_malformed_strings(self, value):
        with pytest.raises(InvalidFormatError) as e:
            validate_id(value, "flat ID")
        assert e.value.field == "flat ID"
        assert "Invalid flat ID format" in e.value.detail

    @pytest.mark.parametrize("value", [None, 42, b"026ce9a5-eded-480f-b98c-a62b459807aa"])
    def test_rejects_non_strings(self, value):
        with pytest.raises(InvalidFormatError):
            validate_id(value)


class TestValidateCommand:

    def test_valid_dict_returns_model(self):
        command = validate_command(payment_models.GeneratePayments, {"month": 6, "year": 2026})
        assert command.month == 6
        assert command.year == 2026

    def test_accepts_built_model(self):
        built = payment_models.GeneratePayments(month=1, year=2026)
        assert validate_command(payment_models.GeneratePayments, built) == built

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range(self, month):
        with pytest.raises(InvalidInputError) as e:
            validate_command(payment_models.GeneratePayments, {"month": month, "year": 2026})
        assert set(e.value.errors) == {"month"}

    @pytest.mark.parametrize("year", [1899, 2101])
    def test_year_out_of_range(self, year):
        with pytest.raises(InvalidInputError) as e:
            validate_command(payment_models.GeneratePayments, {"month": 1, "year": year})
        assert set(e.value.errors) == {"year"}

    def test_boundaries_are_accepted(self):
        validate_command(payment_models.GeneratePayments, {"month": 1, "year": 1900})
        validate_command(payment_models.GeneratePayments, {"month": 12, "year": 2100})

    def test_reports_every_failing_field(self):
        with pytest.raises(InvalidInputError) as e:
            validate_command(payment_type_models.PaymentTypeCreate, {"name": "", "base_amount": "-1"})
        assert set(e.value.errors) == {"name", "base_amount"}
        assert e.value.detail == "Validation failed"

    def test_missing_fields(self):
        with pytest.raises(InvalidInputError) as e:
            validate_command(payment_models.GeneratePayments, {})
        assert set(e.value.errors) == {"month", "year"}

    def test_non_dict_payload_is_reported_on_root(self):
        with pytest.raises(InvalidInputError) as e:
            validate_command(payment_models.GeneratePayments, ["not", "a", "dict"])
        assert "__root__" in e.value.errors
