"""Tests for invoice commands."""

import csv
import io

from diamondbook.cli.main import cli


def test_invoice_create(cli_runner, temp_db, sample_client, sample_diamonds):
    ids = [str(d.id) for d in sample_diamonds]
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "create",
            "Sunrise Gems",
            *ids,
            "--issue-date",
            "2024-03-05",
        ],
    )

    assert result.exit_code == 0
    assert "Created invoice INV-20240305-1" in result.output
    assert "Entries: 2" in result.output
    assert "Total: ₹80,000" in result.output
    assert "Due: 04/04/2024" in result.output


def test_invoice_create_all_uninvoiced(cli_runner, temp_db, sample_client, sample_diamonds):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "invoice", "create", "Sunrise Gems", "--all-uninvoiced"],
    )

    assert result.exit_code == 0
    assert "Entries: 2" in result.output


def test_invoice_create_without_entries(cli_runner, temp_db, sample_client):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "create", "Sunrise Gems"]
    )

    assert result.exit_code == 1
    assert "at least one diamond entry" in result.output


def test_invoice_create_bad_date(cli_runner, temp_db, sample_client, sample_diamonds):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "create",
            "Sunrise Gems",
            str(sample_diamonds[0].id),
            "--due-date",
            "someday",
        ],
    )

    assert result.exit_code == 1
    assert "Invalid due date" in result.output


def test_invoice_create_settings_from_environment(
    cli_runner, temp_db, sample_client, sample_diamonds, monkeypatch
):
    monkeypatch.setenv("DIAMONDBOOK_INVOICE_PREFIX", "SD")
    monkeypatch.setenv("DIAMONDBOOK_PAYMENT_TERMS_DAYS", "15")
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "create",
            "Sunrise Gems",
            str(sample_diamonds[0].id),
            "--issue-date",
            "2024-03-05",
        ],
    )

    assert result.exit_code == 0
    assert "Created invoice SD-20240305-1" in result.output
    assert "Due: 20/03/2024" in result.output


def test_invalid_setting_reported(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("DIAMONDBOOK_PAYMENT_TERMS_DAYS", "soon")
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "invoice", "list"])

    assert result.exit_code == 1
    assert "DIAMONDBOOK_PAYMENT_TERMS_DAYS" in result.output


def test_invoice_list(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "invoice", "list"])

    assert result.exit_code == 0
    assert "INV-20240305-1" in result.output
    assert "Past Due" in result.output
    assert "₹80,000" in result.output


def test_invoice_list_filters(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "list", "--status", "paid"]
    )
    assert result.exit_code == 0
    assert "No invoices found" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "list", "--overdue"]
    )
    assert result.exit_code == 0
    assert "INV-20240305-1" in result.output


def test_invoice_show(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "show", "INV-20240305-1"]
    )

    assert result.exit_code == 0
    assert "4P Plus: 40 pcs, 10.00 ct @ ₹5,000/ct = ₹50,000" in result.output
    assert "4P Minus: 100 pcs, 8.00 ct @ ₹300/pc = ₹30,000" in result.output
    assert "Grand Total: ₹80,000" in result.output


def test_invoice_show_missing(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "show", "INV-19990101-1"]
    )

    assert result.exit_code == 1
    assert "Invoice 'INV-19990101-1' not found" in result.output


def test_invoice_update_entries(cli_runner, temp_db, sample_invoice, sample_diamonds):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "update",
            "INV-20240305-1",
            str(sample_diamonds[1].id),
            "--due-date",
            "2024-04-15",
        ],
    )

    assert result.exit_code == 0
    assert "Updated invoice INV-20240305-1" in result.output
    assert "Entries: 1" in result.output
    assert "Total: ₹30,000" in result.output
    assert "Due: 15/04/2024" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "diamond", "list", "--uninvoiced"]
    )
    assert "K-101" in result.output
    assert "1 entries" in result.output


def test_invoice_update_notes_keeps_entries(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "invoice", "update", str(sample_invoice.id), "--notes", "Revised"],
    )

    assert result.exit_code == 0
    assert "Entries: 2" in result.output
    assert "Total: ₹80,000" in result.output
    temp_db.disconnect()
    assert temp_db.get_invoice(sample_invoice.id).notes == "Revised"


def test_invoice_update_new_client_needs_entries(cli_runner, temp_db, client_service, sample_invoice):
    client_service.create_client(name="Shah Exports")
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "update",
            "INV-20240305-1",
            "--client",
            "Shah Exports",
        ],
    )

    assert result.exit_code == 1
    assert "Select diamond entries for the new client" in result.output


def test_invoice_update_nothing(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "update", "INV-20240305-1"]
    )

    assert result.exit_code == 0
    assert "Nothing to update." in result.output


def test_invoice_print(cli_runner, temp_db, sample_invoice, sample_company):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "print",
            str(sample_invoice.id),
            "--date-style",
            "compact",
        ],
    )

    assert result.exit_code == 0
    assert "Issue Date: 05/03/24" in result.output
    assert "Shree Diamonds" in result.output
    assert "Grand Total:" in result.output


def test_invoice_pay_and_unpay(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "pay",
            "INV-20240305-1",
            "--method",
            "upi",
            "--date",
            "2024-03-20",
        ],
    )
    assert result.exit_code == 0
    assert "marked as paid via UPI" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "show", "INV-20240305-1"]
    )
    assert "Status: Paid" in result.output
    assert "Paid: 20/03/2024 via UPI" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "unpay", "INV-20240305-1"]
    )
    assert result.exit_code == 0
    assert "marked as pending" in result.output


def test_invoice_pay_requires_known_method(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "invoice", "pay", "INV-20240305-1", "--method", "barter"],
    )

    assert result.exit_code == 2


def test_invoice_delete(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "delete", "INV-20240305-1", "-y"]
    )

    assert result.exit_code == 0
    assert "Deleted invoice INV-20240305-1" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "diamond", "list", "--uninvoiced"]
    )
    assert "2 entries" in result.output


def test_invoice_export_stdout(cli_runner, temp_db, sample_invoice):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "invoice", "export", "INV-20240305-1"]
    )

    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.output)))
    assert rows[0][0] == "#"
    assert len(rows) == 3


def test_invoice_export_file(cli_runner, temp_db, sample_invoice, tmp_path):
    output = tmp_path / "invoice.csv"
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "invoice",
            "export",
            "INV-20240305-1",
            "--output",
            str(output),
        ],
    )

    assert result.exit_code == 0
    assert "Exported 2 line items" in result.output
    assert output.read_text(encoding="utf-8").startswith("#,Diamond ID,Kapan")
