"""Import rule management commands."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

import click
from reconkit.cli.error_handling import handle_domain_error
from reconkit.cli.account_resolution import resolve_account_or_exit
from reconkit.domain.account import AccountService
from reconkit.domain.entities import MerchantRule, TransferRule, TypeMappingRule, TRANSACTION_TYPES
from reconkit.domain.rules import RuleService


def _load_rules(ctx) -> RuleService:
    service = RuleService(ctx.obj["db"])
    service.load()
    return service


def _report_saved(ok: bool, what: str) -> None:
    if ok:
        click.echo(f"Saved {what}.")
    else:
        click.echo(f"Warning: {what} could not be saved; changes are not persisted.", err=True)


@click.group()
def rules_group():
    """Manage type, merchant and transfer rules."""
    pass


# Type mapping rules
@rules_group.group("type")
def type_group():
    """Map bank type codes to transaction types."""
    pass


@type_group.command("list")
@click.pass_context
def list_type_rules(ctx):
    """List type mapping rules."""
    service = _load_rules(ctx)
    click.echo("\nType rules:")
    click.echo("-" * 40)
    for rule in service.type_rules:
        click.echo(f"{rule.bank_code:<10} -> {rule.maps_to}")


@type_group.command("set")
@click.argument("bank_code")
@click.argument("maps_to", type=click.Choice(TRANSACTION_TYPES))
@click.pass_context
def set_type_rule(ctx, bank_code: str, maps_to: str):
    """Map BANK_CODE to a transaction type, replacing any existing mapping.

    Examples:
        reconkit rules type set DEB expense
        reconkit rules type set TFR transfer
    """
    service = _load_rules(ctx)
    code = bank_code.strip().upper()
    rules = [r for r in service.type_rules if r.bank_code.strip().upper() != code]
    rules.append(TypeMappingRule(id="", bank_code=bank_code.strip(), maps_to=maps_to))
    try:
        ok = service.save_type_rules(rules)
    except ValueError as e:
        handle_domain_error(ctx, e)
    _report_saved(ok, "type rules")


@type_group.command("remove")
@click.argument("bank_code")
@click.pass_context
def remove_type_rule(ctx, bank_code: str):
    """Remove the mapping for BANK_CODE."""
    service = _load_rules(ctx)
    code = bank_code.strip().upper()
    rules = [r for r in service.type_rules if r.bank_code.strip().upper() != code]
    if len(rules) == len(service.type_rules):
        click.echo(f"Error: No type rule for '{bank_code}'", err=True)
        ctx.exit(1)
    _report_saved(service.save_type_rules(rules), "type rules")


# Merchant rules
@rules_group.group("merchant")
def merchant_group():
    """Rewrite records whose description, type or amount match."""
    pass


@merchant_group.command("list")
@click.pass_context
def list_merchant_rules(ctx):
    """List merchant rules in evaluation order."""
    service = _load_rules(ctx)
    if not service.merchant_rules:
        click.echo("No merchant rules found.")
        return

    click.echo("\nMerchant rules (first match wins):")
    click.echo("-" * 80)
    for rule in service.merchant_rules:
        conditions = []
        if rule.match_description:
            mode = "matches" if rule.use_regex else "contains"
            conditions.append(f"description {mode} '{rule.contains}'")
        if rule.match_type:
            conditions.append(f"type = {rule.match_type_value}")
        if rule.match_amount:
            conditions.append(f"amount = {rule.match_amount_value}")
        actions = [
            f"{label}={value}"
            for label, value in (
                ("description", rule.set_description),
                ("category", rule.set_category),
                ("type", rule.set_type),
                ("from", rule.set_from_account_id),
                ("to", rule.set_to_account_id),
                ("notes", rule.set_notes),
            )
            if value not in ("", None)
        ]
        click.echo(f"ID: {rule.id:>4} | {' AND '.join(conditions)} => {', '.join(actions)}")


@merchant_group.command("add")
@click.option("--contains", help="Description text (or pattern with --regex) to match")
@click.option("--regex", is_flag=True, help="Treat --contains as a case-insensitive regex")
@click.option("--match-type", type=click.Choice(TRANSACTION_TYPES), help="Resolved type to match")
@click.option("--match-amount", type=str, help="Exact absolute amount to match")
@click.option("--set-description", default="", help="Description to set")
@click.option("--set-category", default="", help="Category to set")
@click.option("--set-type", type=click.Choice(TRANSACTION_TYPES), help="Type to set")
@click.option("--set-from", "set_from", help="From-account name or ID to set")
@click.option("--set-to", "set_to", help="To-account name or ID to set")
@click.option("--set-notes", default="", help="Notes to set")
@click.pass_context
def add_merchant_rule(
    ctx,
    contains: Optional[str],
    regex: bool,
    match_type: Optional[str],
    match_amount: Optional[str],
    set_description: str,
    set_category: str,
    set_type: Optional[str],
    set_from: Optional[str],
    set_to: Optional[str],
    set_notes: str,
):
    """Append a merchant rule.

    Every given match option must hold for the rule to fire.

    Examples:
        reconkit rules merchant add --contains TESCO --set-category Groceries
        reconkit rules merchant add --contains "^AMZN" --regex --set-description Amazon
        reconkit rules merchant add --match-type expense --match-amount 9.99 --set-category Subscriptions
    """
    account_service = AccountService(ctx.obj["db"])
    from_id = resolve_account_or_exit(ctx, account_service, set_from)
    to_id = resolve_account_or_exit(ctx, account_service, set_to)

    amount = None
    if match_amount is not None:
        try:
            amount = abs(Decimal(match_amount))
        except ArithmeticError:
            click.echo(f"Error: Invalid amount '{match_amount}'", err=True)
            ctx.exit(1)

    rule = MerchantRule(
        id="new",
        match_description=contains is not None,
        match_type=match_type is not None,
        match_amount=amount is not None,
        use_regex=regex,
        contains=contains or "",
        match_type_value=match_type or "",
        match_amount_value=amount,
        set_description=set_description,
        set_category=set_category,
        set_type=set_type or "",
        set_from_account_id=from_id,
        set_to_account_id=to_id,
        set_notes=set_notes,
    )

    service = _load_rules(ctx)
    try:
        saved = service.persist_merchant_rule(rule)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if service.saved.get("merchant"):
        click.echo(f"Created merchant rule (ID: {saved.id})")
    else:
        _report_saved(False, "merchant rule")


@merchant_group.command("update")
@click.argument("rule_id")
@click.option("--contains", help="New description text or pattern")
@click.option("--regex/--no-regex", default=None, help="Treat the pattern as a regex")
@click.option("--set-description", help="Description to set")
@click.option("--set-category", help="Category to set")
@click.option("--set-notes", help="Notes to set")
@click.pass_context
def update_merchant_rule(
    ctx,
    rule_id: str,
    contains: Optional[str],
    regex: Optional[bool],
    set_description: Optional[str],
    set_category: Optional[str],
    set_notes: Optional[str],
):
    """Edit a merchant rule in place, keeping its position."""
    service = _load_rules(ctx)
    rule = next((r for r in service.merchant_rules if r.id == rule_id), None)
    if rule is None:
        click.echo(f"Error: Merchant rule {rule_id} not found", err=True)
        ctx.exit(1)

    changes = {}
    if contains is not None:
        changes.update(contains=contains, match_description=True)
    if regex is not None:
        changes["use_regex"] = regex
    if set_description is not None:
        changes["set_description"] = set_description
    if set_category is not None:
        changes["set_category"] = set_category
    if set_notes is not None:
        changes["set_notes"] = set_notes

    try:
        service.update_merchant_rule(replace(rule, **changes))
    except ValueError as e:
        handle_domain_error(ctx, e)
    _report_saved(service.saved.get("merchant", False), "merchant rule")


@merchant_group.command("delete")
@click.argument("rule_id")
@click.pass_context
def delete_merchant_rule(ctx, rule_id: str):
    """Delete a merchant rule."""
    service = _load_rules(ctx)
    try:
        service.delete_merchant_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    if service.saved.get("merchant"):
        click.echo(f"Deleted merchant rule {rule_id}")
    else:
        _report_saved(False, "merchant rules")


# Transfer rules
@rules_group.group("transfer")
def transfer_group():
    """Pair outgoing and incoming legs of transfers between accounts."""
    pass


@transfer_group.command("list")
@click.pass_context
def list_transfer_rules(ctx):
    """List transfer rules in evaluation order."""
    service = _load_rules(ctx)
    if not service.transfer_rules:
        click.echo("No transfer rules found.")
        return

    click.echo("\nTransfer rules:")
    click.echo("-" * 80)
    for rule in service.transfer_rules:
        click.echo(
            f"{rule.label or '(unnamed)'}: out '{rule.from_description_contains}' -> "
            f"in '{rule.to_description_contains}' within {rule.tolerance_days} day(s)"
        )


@transfer_group.command("add")
@click.argument("from_contains")
@click.argument("to_contains")
@click.option("--label", default="", help="Rule label")
@click.option("--tolerance-days", type=int, default=2, show_default=True, help="Allowed date gap")
@click.pass_context
def add_transfer_rule(ctx, from_contains: str, to_contains: str, label: str, tolerance_days: int):
    """Add a transfer rule.

    FROM_CONTAINS is matched against outgoing rows, TO_CONTAINS against
    incoming rows.

    Examples:
        reconkit rules transfer add "CAMERON REES" "C REES" --label "Weekly savings"
    """
    service = _load_rules(ctx)
    rules = list(service.transfer_rules)
    rules.append(
        TransferRule(
            id="",
            label=label,
            from_description_contains=from_contains,
            to_description_contains=to_contains,
            tolerance_days=tolerance_days,
        )
    )
    try:
        ok = service.save_transfer_rules(rules)
    except ValueError as e:
        handle_domain_error(ctx, e)
    _report_saved(ok, "transfer rules")


@transfer_group.command("remove")
@click.argument("label")
@click.pass_context
def remove_transfer_rule(ctx, label: str):
    """Remove the transfer rule with LABEL."""
    service = _load_rules(ctx)
    rules = [r for r in service.transfer_rules if r.label != label]
    if len(rules) == len(service.transfer_rules):
        click.echo(f"Error: No transfer rule labelled '{label}'", err=True)
        ctx.exit(1)
    _report_saved(service.save_transfer_rules(rules), "transfer rules")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rules_group, name="rules")
