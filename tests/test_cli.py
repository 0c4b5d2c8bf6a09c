"""End-to-end tests for the command line interface."""

import pytest
from subtrack.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Run a CLI command against the temporary database."""

    def run(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return run


def _add_netflix(invoke):
    return invoke(
        "add", "Netflix", "--amount", "₹199", "--category", "entertainment", "--date", "in 5 days"
    )


def test_help_does_not_open_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Subscription and bill tracker" in result.output


def test_add_and_list(invoke):
    result = _add_netflix(invoke)

    assert result.exit_code == 0
    assert "Created subscription 'Netflix' (ID: " in result.output
    assert "Amount: ₹199 monthly" in result.output
    assert "Renews:" in result.output

    result = invoke("list")
    assert result.exit_code == 0
    assert "Netflix" in result.output
    assert "auto-pay" in result.output
    assert "active" in result.output


def test_list_empty(invoke):
    result = invoke("list")

    assert result.exit_code == 0
    assert "No subscriptions found" in result.output


def test_add_manual_without_date_fails(invoke):
    result = invoke("add", "Gym", "--amount", "500", "--manual")

    assert result.exit_code == 1
    assert "Error: Subscription 'Gym' pays manually and needs an expiry date" in result.output


def test_add_invalid_amount(invoke):
    result = invoke("add", "Gym", "--amount", "free")

    assert result.exit_code == 1
    assert "Error: Invalid amount format" in result.output


def test_add_invalid_date(invoke):
    result = invoke("add", "Gym", "--amount", "500", "--date", "someday soon")

    assert result.exit_code == 1
    assert "Error: Invalid date format" in result.output


def test_dashboard(invoke):
    _add_netflix(invoke)
    invoke(
        "add", "Gym", "--amount", "3000", "--cycle", "quarterly", "--category", "fitness",
        "--manual", "--date", "in 3 days", "--reminder", "1",
    )

    result = invoke("dashboard")

    assert result.exit_code == 0
    assert "Monthly spending:" in result.output
    assert "₹1,199" in result.output
    assert "Active subscriptions: 2" in result.output
    assert "renews" in result.output
    assert "expires" in result.output
    assert "Fitness" in result.output
    assert "Entertainment" in result.output


def test_dashboard_empty(invoke):
    result = invoke("dashboard")

    assert result.exit_code == 0
    assert "Active subscriptions: 0" in result.output
    assert "No active subscriptions yet" in result.output


def test_show_and_edit_by_name(invoke):
    _add_netflix(invoke)

    result = invoke("edit", "netflix", "--amount", "249", "--provider", "Netflix Inc.")
    assert result.exit_code == 0
    assert "Updated subscription 'Netflix'" in result.output

    result = invoke("show", "Netflix")
    assert result.exit_code == 0
    assert "Amount: ₹249 (Monthly)" in result.output
    assert "Provider: Netflix Inc." in result.output
    assert "Yearly: ₹2,988" in result.output


def test_switch_to_manual(invoke):
    _add_netflix(invoke)

    result = invoke("edit", "Netflix", "--manual")
    assert result.exit_code == 1
    assert "needs an expiry date" in result.output

    result = invoke("edit", "Netflix", "--manual", "--date", "in 10 days")
    assert result.exit_code == 0

    result = invoke("show", "Netflix")
    assert "Billing: manual" in result.output
    assert "Expires:" in result.output
    assert "Reminder: 1 day(s) before" in result.output


def test_cancel_activate_delete(invoke):
    _add_netflix(invoke)

    result = invoke("cancel", "Netflix")
    assert result.exit_code == 0
    assert "Cancelled subscription 'Netflix'" in result.output
    assert "cancelled" in invoke("list").output
    assert "Active subscriptions: 0" in invoke("dashboard").output

    result = invoke("activate", "Netflix")
    assert "Reactivated subscription 'Netflix'" in result.output

    result = invoke("delete", "Netflix", "--yes")
    assert result.exit_code == 0
    assert "Deleted subscription 'Netflix'" in result.output
    assert "No subscriptions found" in invoke("list").output


def test_delete_declined(invoke):
    _add_netflix(invoke)

    result = invoke("delete", "Netflix", input="n\n")

    assert "Cancelled." in result.output
    assert "Netflix" in invoke("list").output


def test_unknown_subscription(invoke):
    result = invoke("show", "Nope")

    assert result.exit_code == 1
    assert "Error: Subscription 'Nope' not found" in result.output


def test_reminders(invoke):
    invoke("add", "Gym", "--amount", "500", "--manual", "--date", "in 10 days", "--reminder", "2")

    result = invoke("reminders")

    assert result.exit_code == 0
    assert "1 reminder(s):" in result.output
    assert "Gym payment of ₹500 due in 2 days!" in result.output


def test_reminders_none(invoke):
    _add_netflix(invoke)

    assert "No reminders to schedule." in invoke("reminders").output


def test_settings(invoke):
    result = invoke("settings", "set", "--name", "Asha", "--currency", "usd", "--theme", "dark")
    assert result.exit_code == 0
    assert "Settings saved." in result.output

    result = invoke("settings", "show")
    assert "Name: Asha" in result.output
    assert "Currency: USD" in result.output
    assert "Theme: dark" in result.output


def test_settings_currency_used_for_new_subscriptions(invoke):
    invoke("settings", "set", "--currency", "USD")

    result = invoke("add", "Music", "--amount", "9.99")

    assert "Amount: $9.99 monthly" in result.output


def test_chat(invoke):
    _add_netflix(invoke)

    result = invoke("chat", "how", "much", "am", "I", "spending")

    assert result.exit_code == 0
    assert "Monthly: ₹199" in result.output
    assert "Try: " in result.output


def test_reset(invoke):
    _add_netflix(invoke)
    invoke("settings", "set", "--name", "Asha")

    result = invoke("reset", "--yes")

    assert result.exit_code == 0
    assert "All data cleared." in result.output
    assert "No subscriptions found" in invoke("list").output
    assert "Name: -" in invoke("settings", "show").output
