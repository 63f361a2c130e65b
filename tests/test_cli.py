import yaml
from click.testing import CliRunner

from finance_dashboard.cli import main as cli


def _run(lines, args=()):
    runner = CliRunner()
    return runner.invoke(cli, list(args), input="\n".join(lines) + "\n")


def test_add_list_and_summary():
    res = _run([
        "add", "Salary", "1000", "income", "2025-01-01",
        "add", "food", "200", "", "2025-01-02",
        "list",
        "quit",
    ])

    assert res.exit_code == 0, res.output
    assert "✅ Added #1: Salary" in res.output
    assert "✅ Added #2: food" in res.output
    assert "Income:  Rp 1.000" in res.output
    assert "Expense: Rp 200" in res.output
    assert "Balance: Rp 800" in res.output
    assert "2025-01-02" in res.output
    assert "- Rp 200" in res.output


def test_invalid_add_leaves_ledger_unchanged():
    res = _run([
        "add", "", "100", "expense", "",
        "add", "rent", "-5", "expense", "",
        "list",
        "quit",
    ])

    assert res.exit_code == 0, res.output
    assert res.output.count("❌ Please fill in every field correctly") == 2
    assert "Belum ada transaksi" in res.output


def test_remove_existing_and_missing():
    res = _run([
        "add", "food", "10", "expense", "",
        "remove 1",
        "remove 1",
        "remove abc",
        "summary",
        "quit",
    ])

    assert res.exit_code == 0, res.output
    assert "✅ Removed #1" in res.output
    assert "No transaction with id 1" in res.output
    assert "Invalid id: abc" in res.output


def test_chart_output():
    res = _run([
        "add", "food", "10", "expense", "2025-01-03",
        "add", "food", "5", "expense", "2025-02-03",
        "add", "transport", "5", "expense", "2025-02-04",
        "chart",
        "chart month",
        "chart week",
        "quit",
    ])

    assert res.exit_code == 0, res.output
    assert "food" in res.output and "75.0%" in res.output
    assert "transport" in res.output and "25.0%" in res.output
    assert "Januari:" in res.output
    assert "January 2025:" in res.output
    assert "February 2025:" in res.output
    assert "Period must be one of: all, month" in res.output


def test_empty_chart_placeholder_and_unknown_command():
    res = _run(["chart", "bogus", "help"])

    assert res.exit_code == 0, res.output
    assert "Belum ada data" in res.output
    assert "Unknown command: bogus" in res.output
    assert "remove ID" in res.output


def test_config_file_changes_currency(tmp_path):
    cfg = tmp_path / "cashboard.yaml"
    cfg.write_text(yaml.safe_dump({"currency": {"symbol": "$", "thousands_sep": ",", "decimal_sep": "."}}))

    res = _run(["add", "Salary", "2500.5", "income", "", "quit"], args=["--config", str(cfg)])

    assert res.exit_code == 0, res.output
    assert "Balance: $ 2,500.5" in res.output


def test_list_filtered_by_month():
    res = _run([
        "add", "Salary", "1000", "income", "2025-01-01",
        "add", "Groceries", "200", "expense", "2025-02-02",
        "list 2025-02",
        "list 2024-12",
        "list 2025/02",
        "quit",
    ])

    assert res.exit_code == 0, res.output
    listed = res.output.split("cashboard> ")
    feb, dec, bad = listed[-4], listed[-3], listed[-2]
    assert "Groceries" in feb and "Salary" not in feb
    assert "Belum ada transaksi" in dec
    assert "month must be YYYY-MM" in bad
