"""Income and expense record commands.

Thin wrappers over taxpal.sdk.records.
"""

from datetime import date

import click

from taxpal.sdk import records as sdk_records
from taxpal.sdk.schemas import EXPENSE_CATEGORIES, INCOME_CATEGORIES, INCOME_PLATFORMS, PAYMENT_METHODS

from .common import emit, format_option, resolve_format, sdk_errors, year_option
from .renderers.tax_renderer import render_records


def _today() -> str:
    return date.today().isoformat()


def list_filter_options(func):
    """Date range, search and sort options shared by both list commands."""
    options = [
        click.option("--from", "start_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
                     help="Earliest date, YYYY-MM-DD (inclusive)"),
        click.option("--to", "end_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
                     help="Latest date, YYYY-MM-DD (inclusive)"),
        click.option("--search", default=None, help="Case-insensitive text in description, source or vendor"),
        click.option("--sort", "sort_by", type=click.Choice(sdk_records.SORT_FIELDS), default="date",
                     show_default=True),
        click.option("--desc", "descending", is_flag=True, help="Sort in descending order"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _list(record_type: str, output_format, **filters):
    for key in ("start_date", "end_date"):
        if filters.get(key) is not None:
            filters[key] = filters[key].date()
    with sdk_errors():
        found = sdk_records.list_records(record_type=record_type, **filters)
    label = "income" if record_type == "income" else "expense"
    emit(found, resolve_format(output_format), lambda console, data: render_records(console, data, label))


def _get_typed(record_type: str, record_id: str) -> dict:
    record = sdk_records.get_record(record_id)
    if record is None or (record.get("meta") or {}).get("type") != record_type:
        raise click.ClickException(f"No {record_type} record with ID {record_id}")
    return record


def _remove(record_type: str, record_id: str):
    _get_typed(record_type, record_id)
    sdk_records.remove_record(record_id)
    click.echo(f"Removed {record_type} record {record_id}")


def _update(record_type: str, record_id: str, fields: dict):
    fields = {k: v for k, v in fields.items() if v is not None}
    if not fields:
        raise click.UsageError("Nothing to update; pass at least one option")
    _get_typed(record_type, record_id)
    with sdk_errors():
        record = sdk_records.update_record(record_id, **fields)
    data = record["data"]
    click.echo(f"Updated {record_type} record {record_id}: ${data['amount']:,.2f} on {data['date']}")


def _added(record: dict):
    data = record["data"]
    click.echo(f"Added {record['meta']['type']} record {record['id']}: ${data['amount']:,.2f} on {data['date']}")


# --- income ---

@click.group()
def income():
    """Track income entries."""
    pass


@income.command("add")
@click.option("--amount", "-a", type=click.FloatRange(min=0), required=True, help="Amount received")
@click.option("--source", "-s", required=True, help="Client or payer")
@click.option("--description", "-d", required=True, help="What the payment was for")
@click.option("--category", "-c", type=click.Choice(INCOME_CATEGORIES), default="freelance", show_default=True)
@click.option("--platform", type=click.Choice(INCOME_PLATFORMS), default="other", show_default=True)
@click.option("--date", "entry_date", default=None, help="Date received, YYYY-MM-DD (default: today)")
@click.option("--invoice", "invoice_number", default=None, help="Invoice number")
@click.option("--recurring", is_flag=True, help="Recurring income")
@click.option("--non-taxable", is_flag=True, help="Exclude from taxable income")
def income_add(amount, source, description, category, platform, entry_date, invoice_number, recurring, non_taxable):
    """Add an income entry.

    Examples:
        taxpal income add -a 2500 -s "Acme Corp" -d "Website redesign" --date 2024-03-01
        taxpal income add -a 40 -s "Friend" -d "Gift" --non-taxable
    """
    with sdk_errors():
        record = sdk_records.add_income(
            amount=amount,
            source=source,
            description=description,
            category=category,
            platform=platform,
            date=entry_date or _today(),
            invoice_number=invoice_number,
            is_recurring=recurring,
            taxable=not non_taxable,
        )
    _added(record)


@income.command("list")
@year_option
@click.option("--category", "-c", type=click.Choice(INCOME_CATEGORIES), default=None)
@list_filter_options
@format_option
def income_list(year, category, start_date, end_date, search, sort_by, descending, output_format):
    """List income entries (all years unless --year is given).

    Examples:
        taxpal income list --year 2024 --category consulting
        taxpal income list --from 2024-01-01 --to 2024-03-31 --sort amount --desc
    """
    _list("income", output_format, year=year, category=category, start_date=start_date, end_date=end_date,
          search=search, sort_by=sort_by, descending=descending)


@income.command("update")
@click.argument("record_id")
@click.option("--amount", "-a", type=click.FloatRange(min=0), default=None)
@click.option("--source", "-s", default=None)
@click.option("--description", "-d", default=None)
@click.option("--category", "-c", type=click.Choice(INCOME_CATEGORIES), default=None)
@click.option("--platform", type=click.Choice(INCOME_PLATFORMS), default=None)
@click.option("--date", "entry_date", default=None, help="YYYY-MM-DD; a new year moves the entry")
@click.option("--invoice", "invoice_number", default=None)
@click.option("--recurring/--not-recurring", default=None)
@click.option("--taxable/--non-taxable", default=None)
def income_update(record_id, amount, source, description, category, platform, entry_date, invoice_number,
                  recurring, taxable):
    """Change fields of an income entry. Only the options given are changed."""
    _update("income", record_id, {
        "amount": amount,
        "source": source,
        "description": description,
        "category": category,
        "platform": platform,
        "date": entry_date,
        "invoice_number": invoice_number,
        "is_recurring": recurring,
        "taxable": taxable,
    })


@income.command("remove")
@click.argument("record_id")
def income_remove(record_id):
    """Remove an income entry by ID."""
    _remove("income", record_id)


# --- expenses ---

@click.group()
def expenses():
    """Track business expenses."""
    pass


@expenses.command("add")
@click.option("--amount", "-a", type=click.FloatRange(min=0), required=True, help="Amount paid")
@click.option("--description", "-d", required=True, help="What was purchased")
@click.option("--category", "-c", type=click.Choice(EXPENSE_CATEGORIES), default="other", show_default=True)
@click.option("--payment-method", type=click.Choice(PAYMENT_METHODS), default="credit-card", show_default=True)
@click.option("--vendor", default=None, help="Vendor name")
@click.option("--receipt-url", default=None, help="Link to the receipt")
@click.option("--date", "entry_date", default=None, help="Date paid, YYYY-MM-DD (default: today)")
@click.option("--recurring", is_flag=True, help="Recurring expense")
@click.option("--non-deductible", is_flag=True, help="Not deductible as a business expense")
@click.option("--notes", default=None, help="Free-form notes")
def expenses_add(amount, description, category, payment_method, vendor, receipt_url, entry_date, recurring,
                 non_deductible, notes):
    """Add an expense entry.

    Examples:
        taxpal expenses add -a 1200 -d "Laptop" -c equipment --date 2024-02-10
        taxpal expenses add -a 60 -d "Team lunch" -c meals --non-deductible
    """
    with sdk_errors():
        record = sdk_records.add_expense(
            amount=amount,
            description=description,
            category=category,
            payment_method=payment_method,
            vendor=vendor,
            receipt_url=receipt_url,
            date=entry_date or _today(),
            is_recurring=recurring,
            is_deductible=not non_deductible,
            notes=notes,
        )
    _added(record)


@expenses.command("list")
@year_option
@click.option("--category", "-c", type=click.Choice(EXPENSE_CATEGORIES), default=None)
@click.option("--deductible/--non-deductible", default=None, help="Only deductible or non-deductible expenses")
@list_filter_options
@format_option
def expenses_list(year, category, deductible, start_date, end_date, search, sort_by, descending, output_format):
    """List expense entries (all years unless --year is given).

    Examples:
        taxpal expenses list --year 2024 --non-deductible
        taxpal expenses list --search adobe --sort amount --desc
    """
    _list("expense", output_format, year=year, category=category, deductible=deductible, start_date=start_date,
          end_date=end_date, search=search, sort_by=sort_by, descending=descending)


@expenses.command("update")
@click.argument("record_id")
@click.option("--amount", "-a", type=click.FloatRange(min=0), default=None)
@click.option("--description", "-d", default=None)
@click.option("--category", "-c", type=click.Choice(EXPENSE_CATEGORIES), default=None)
@click.option("--payment-method", type=click.Choice(PAYMENT_METHODS), default=None)
@click.option("--vendor", default=None)
@click.option("--receipt-url", default=None)
@click.option("--date", "entry_date", default=None, help="YYYY-MM-DD; a new year moves the entry")
@click.option("--recurring/--not-recurring", default=None)
@click.option("--deductible/--non-deductible", default=None)
@click.option("--notes", default=None)
def expenses_update(record_id, amount, description, category, payment_method, vendor, receipt_url, entry_date,
                    recurring, deductible, notes):
    """Change fields of an expense entry. Only the options given are changed."""
    _update("expense", record_id, {
        "amount": amount,
        "description": description,
        "category": category,
        "payment_method": payment_method,
        "vendor": vendor,
        "receipt_url": receipt_url,
        "date": entry_date,
        "is_recurring": recurring,
        "is_deductible": deductible,
        "notes": notes,
    })


@expenses.command("remove")
@click.argument("record_id")
def expenses_remove(record_id):
    """Remove an expense entry by ID."""
    _remove("expense", record_id)
