"""End-to-end CLI tests against a temporary data directory."""

import pytest
import yaml
from click.testing import CliRunner

from florist.infrastructure.cli.main import cli


@pytest.fixture
def invoke(tmp_path):
    config = tmp_path / "florist.yaml"
    config.write_text(yaml.safe_dump({"data_dir": str(tmp_path / "data")}), encoding="utf-8")
    runner = CliRunner()

    def run(*args, **kwargs):
        return runner.invoke(cli, ["--config", str(config), *args], **kwargs)

    return run


class TestOrderFlow:

    def test_create_update_and_show(self, invoke):
        result = invoke("bouquet", "add", "--name", "Mawar Merah", "--price", "100000")
        assert result.exit_code == 0, result.output
        assert "Bouquet #1 'Mawar Merah' added at Rp 100.000" in result.output

        result = invoke(
            "order", "create", "--bouquet", "1", "--name", "Siti", "--phone", "08123",
            "--address", "Jl. Kartini 1", "--delivery-price", "20000",
        )
        assert result.exit_code == 0, result.output
        assert "Order #1 created" in result.output
        assert "Rp 120.000" in result.output

        result = invoke("order", "update", "--id", "1", "--dp", "60000")
        assert result.exit_code == 0, result.output
        assert "payment=partial" in result.output

        result = invoke("order", "update", "--id", "1", "--preset", "paid")
        assert "payment=paid" in result.output

        result = invoke("order", "advance", "--id", "1")
        assert "Order #1 is now ordered." in result.output

        result = invoke("order", "show", "--id", "1")
        assert "Status bayar: unpaid → partial" in result.output
        assert "Status bayar: partial → paid" in result.output
        assert "Status order: inquiring → ordered" in result.output

    def test_unknown_order_is_a_click_error(self, invoke):
        result = invoke("order", "show", "--id", "99")
        assert result.exit_code == 1
        assert "Order #99 not found" in result.output

    def test_update_needs_a_field(self, invoke):
        result = invoke("order", "update", "--id", "1")
        assert result.exit_code == 2
        assert "Nothing to update" in result.output

    def test_delete_asks_for_confirmation(self, invoke):
        invoke("bouquet", "add", "--name", "Lily", "--price", "90000")
        invoke(
            "order", "create", "--bouquet", "1", "--name", "Budi", "--phone", "0899",
            "--address", "Jl. B",
        )
        result = invoke("order", "delete", "--id", "1", input="n\n")
        assert result.exit_code == 1
        result = invoke("order", "delete", "--id", "1", "--yes")
        assert "Order #1 deleted." in result.output


class TestQuotes:

    def test_delivery_quote(self, invoke):
        result = invoke("quote", "delivery", "--lat", "-6.7375719", "--lng", "108.5621832")
        assert result.exit_code == 0, result.output
        assert "Zona Same-Day" in result.output
        assert "Rp 15.000" in result.output
        assert "Same-day delivery available." in result.output

    def test_discount_quote(self, invoke):
        invoke("bouquet", "add", "--name", "Tulip", "--price", "50000")
        result = invoke("quote", "discount", "--bouquet", "1", "--quantity", "10")
        assert result.exit_code == 0, result.output
        assert "Rp 450.000" in result.output
        assert "Diskon 10% untuk order 10+ pcs!" in result.output


def test_bad_config_reported(tmp_path):
    config = tmp_path / "florist.yaml"
    config.write_text("cache:\n  ttl_seconds: -1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(config), "order", "list"])
    assert result.exit_code == 1
    assert "ttl_seconds must be positive" in result.output
