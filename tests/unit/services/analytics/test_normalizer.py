"""Tests unitarios para la normalización de pedidos y líneas."""

from datetime import UTC, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.services.analytics.normalizer import (
    build_line_item_lookup,
    coerce_amount,
    normalize_order,
    normalize_orders,
    parse_created_at,
    resolve_summary_totals,
)


class TestCoerceAmount:
    """Tests para la coerción de montos."""

    @pytest.mark.parametrize("value", [None, "abc", "", "   ", [], {}, True, float("nan"), float("inf"), -5, "-1.5"])
    def test_invalid_values_coerce_to_zero(self, value):
        """Debe convertir valores faltantes, no numéricos o negativos a 0."""
        assert coerce_amount(value) == Decimal("0")

    def test_numeric_values(self):
        """Debe aceptar números y strings numéricos."""
        assert coerce_amount(50) == Decimal("50")
        assert coerce_amount(12.5) == Decimal("12.5")
        assert coerce_amount("19.90") == Decimal("19.90")
        assert coerce_amount(Decimal("7.05")) == Decimal("7.05")

    def test_float_is_converted_without_binary_noise(self):
        """Debe convertir floats vía str para evitar artefactos binarios."""
        assert coerce_amount(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["1e30", 1e27, Decimal("1E+16"), "99999999999999999"])
    def test_out_of_range_values_coerce_to_zero(self, value):
        """Debe degradar a 0 magnitudes imposibles para un monto o una cantidad."""
        assert coerce_amount(value) == Decimal("0")

    def test_largest_accepted_value(self):
        assert coerce_amount("9999999999999999.99") == Decimal("9999999999999999.99")


class TestResolveSummaryTotals:
    """Tests para la resolución del resumen plano o anidado."""

    def test_nested_totals(self):
        """Debe leer los totales de summary.totals."""
        totals = resolve_summary_totals(
            {"summary": {"totals": {"current_order_total": 50, "paid_total": 50, "pending_difference": 0}}}
        )

        assert totals.order_total == Decimal("50")
        assert totals.paid_total == Decimal("50")
        assert totals.pending_amount == Decimal("0")

    def test_flat_summary(self):
        """Debe leer los totales directamente de summary."""
        totals = resolve_summary_totals(
            {"summary": {"current_order_total": "20.00", "paid_total": 0, "pending_difference": "20.00"}}
        )

        assert totals.order_total == Decimal("20.00")
        assert totals.paid_total == Decimal("0")
        assert totals.pending_amount == Decimal("20.00")

    def test_empty_nested_totals_fall_back_to_flat(self):
        """Debe usar el resumen plano si summary.totals está vacío."""
        totals = resolve_summary_totals({"summary": {"totals": {}, "current_order_total": 10}})

        assert totals.order_total == Decimal("10")

    @pytest.mark.parametrize("summary", [None, "abc", 42, {}, {"totals": None}])
    def test_malformed_summary_coerces_to_zero(self, summary):
        """Debe dejar los tres totales en cero con resúmenes malformados."""
        totals = resolve_summary_totals({"summary": summary})

        assert totals.order_total == totals.paid_total == totals.pending_amount == Decimal("0")

    def test_missing_summary(self):
        """Debe tolerar pedidos sin summary."""
        totals = resolve_summary_totals({})

        assert totals.order_total == Decimal("0")


class TestParseCreatedAt:
    """Tests para el parseo de fechas de creación."""

    def test_zulu_suffix(self):
        """Debe interpretar el sufijo Z como UTC."""
        assert parse_created_at("2025-03-01T10:00:00Z") == datetime(2025, 3, 1, 10, 0, tzinfo=UTC)

    def test_offset_is_converted_to_utc(self):
        """Debe convertir offsets a UTC."""
        parsed = parse_created_at("2025-03-01T01:00:00+02:00")

        assert parsed == datetime(2025, 2, 28, 23, 0, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(0)

    def test_naive_is_assumed_utc(self):
        """Debe asumir UTC para fechas sin zona horaria."""
        assert parse_created_at("2025-03-01T10:00:00") == datetime(2025, 3, 1, 10, 0, tzinfo=UTC)

    def test_datetime_instance(self):
        """Debe aceptar instancias de datetime."""
        moment = datetime(2025, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=1)))

        assert parse_created_at(moment) == datetime(2025, 3, 1, 11, 0, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345])
    def test_unparseable_returns_none(self, value):
        """Debe retornar None si la fecha no se puede interpretar."""
        assert parse_created_at(value) is None


class TestNormalizeOrder:
    """Tests para la normalización de un pedido."""

    def test_full_order(self):
        """Debe normalizar todos los campos del pedido."""
        order = normalize_order(
            {
                "id": "order_1",
                "status": "completed",
                "created_at": "2025-03-01T10:00:00Z",
                "currency_code": "chf",
                "summary": {"totals": {"current_order_total": 50, "paid_total": 50}},
                "items": [{"id": "oi_1", "item_id": "li_1", "quantity": 2, "unit_price": 25}],
            }
        )

        assert order.id == "order_1"
        assert order.status == "completed"
        assert order.is_paid
        assert order.items[0].item_id == "li_1"
        assert order.items[0].quantity == Decimal("2")
        assert order.items[0].unit_price == Decimal("25")

    def test_missing_status_defaults_to_unknown(self):
        """Debe usar 'unknown' cuando falta el estado."""
        assert normalize_order({"id": "order_1"}).status == "unknown"

    def test_non_mapping_record(self):
        """Debe normalizar registros que no son diccionarios como pedido vacío."""
        order = normalize_order("garbage")

        assert order.id is None
        assert order.totals.order_total == Decimal("0")
        assert order.items == ()

    def test_malformed_items_are_tolerated(self):
        """Debe tolerar items que no son lista o no son diccionarios."""
        assert normalize_order({"items": "abc"}).items == ()

        order = normalize_order({"items": [None, {"item_id": "li_1", "quantity": "x"}]})

        assert order.items[0].item_id is None
        assert order.items[1].quantity == Decimal("0")

    def test_normalize_orders_preserves_order(self):
        """Debe preservar el orden de entrada."""
        orders = normalize_orders([{"id": "a"}, {"id": "b"}, {"id": "c"}])

        assert [order.id for order in orders] == ["a", "b", "c"]


class TestBuildLineItemLookup:
    """Tests para el índice de líneas."""

    def test_lookup_by_id(self):
        """Debe indexar las líneas por identificador."""
        lookup = build_line_item_lookup(
            [{"id": "li_1", "title": "Shirt", "product_id": "prod_1", "unit_price": "10.00", "quantity": 2}]
        )

        assert lookup["li_1"].title == "Shirt"
        assert lookup["li_1"].product_id == "prod_1"
        assert lookup["li_1"].unit_price == Decimal("10.00")

    def test_duplicates_last_write_wins(self):
        """Debe conservar la última aparición de un identificador duplicado."""
        lookup = build_line_item_lookup([{"id": "li_1", "title": "First"}, {"id": "li_1", "title": "Second"}])

        assert len(lookup) == 1
        assert lookup["li_1"].title == "Second"

    def test_records_without_id_are_skipped(self):
        """Debe ignorar registros sin identificador o inválidos."""
        lookup = build_line_item_lookup([{"title": "No id"}, None, "x", {"id": "li_2"}])

        assert list(lookup) == ["li_2"]
