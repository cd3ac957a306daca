"""Tests for the template command."""

from reconkit.cli.main import cli
from reconkit.domain.row_parser import parse_statement, read_headers
from reconkit.domain.bank_format import default_column_config
from reconkit.domain.template import CSV_TEMPLATE


def test_template_prints_csv(cli_runner):
    result = cli_runner.invoke(cli, ["template"])

    assert result.exit_code == 0
    assert result.output.startswith("date,type,description,amount,account")
    assert "Amex#Debt" in result.output


def test_template_writes_file(cli_runner, tmp_path):
    target = tmp_path / "statement.csv"

    result = cli_runner.invoke(cli, ["template", "-o", str(target)])

    assert result.exit_code == 0
    assert target.read_text() == CSV_TEMPLATE


def test_template_parses(make_account):
    """The template is itself a valid annotated statement."""
    config = default_column_config("t.csv", read_headers(CSV_TEMPLATE))
    records = parse_statement(
        CSV_TEMPLATE,
        "t.csv",
        (),
        config,
        [make_account(1, "Monzo Current"), make_account(2, "Marcus", "savings")],
        [make_account(3, "Amex", "debt")],
    )

    assert len(records) == 5
    assert not any(r.account_warning for r in records if r.raw_account_annotation)
